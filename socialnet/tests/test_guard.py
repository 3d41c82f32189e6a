from __future__ import annotations

import pytest
from flask import Flask, jsonify

from socialnet.application.services.token_service import JwtTokenService
from socialnet.domain.users.entities import User
from socialnet.interfaces.http.guard import AccessGuard, current_identity
from socialnet.shared.middleware.error_handler import configure_error_handling

from conftest import T0, FrozenClock


@pytest.fixture()
def tokens(secret: str, clock: FrozenClock) -> JwtTokenService:
    return JwtTokenService(secret=secret, ttl_seconds=60, clock=clock)


@pytest.fixture()
def calls() -> list[int]:
    return []


@pytest.fixture()
def flask_app(tokens: JwtTokenService, calls: list[int]) -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    guard = AccessGuard(tokens)

    def whoami():
        identity = current_identity()
        calls.append(identity.user_id)
        return jsonify({"user_id": identity.user_id, "name": identity.name})

    app.add_url_rule("/whoami", view_func=guard.protect(whoami), methods=["GET"])
    return app


def _token(tokens: JwtTokenService) -> str:
    user = User(
        id=42,
        email="alice@example.com",
        name="Alice",
        avatar=None,
        password_hash="x",
        created_at=T0,
    )
    return tokens.issue(user).bearer


def test_valid_token_reaches_view(flask_app: Flask, tokens: JwtTokenService, calls: list[int]) -> None:
    with flask_app.test_client() as client:
        response = client.get("/whoami", headers={"Authorization": _token(tokens)})

    assert response.status_code == 200
    assert response.get_json() == {"user_id": 42, "name": "Alice"}
    assert calls == [42]


def test_missing_token_is_rejected(flask_app: Flask, calls: list[int]) -> None:
    with flask_app.test_client() as client:
        response = client.get("/whoami")

    assert response.status_code == 401
    assert response.get_json()["error"] == "token_missing"
    assert "WWW-Authenticate" in response.headers
    assert calls == []


def test_bad_signature_is_rejected(flask_app: Flask, calls: list[int]) -> None:
    foreign = JwtTokenService(secret="some-other-secret-that-is-long-enough")

    with flask_app.test_client() as client:
        response = client.get("/whoami", headers={"Authorization": _token(foreign)})

    assert response.status_code == 401
    assert response.get_json()["error"] == "bad_signature"
    assert calls == []


def test_expired_token_is_rejected(
    flask_app: Flask, tokens: JwtTokenService, clock: FrozenClock, calls: list[int]
) -> None:
    token = _token(tokens)
    clock.advance(61)

    with flask_app.test_client() as client:
        response = client.get("/whoami", headers={"Authorization": token})

    payload = response.get_json()
    assert response.status_code == 401
    assert payload["error"] == "token_expired"
    assert payload["context"]["reason"] == "token_expired"
    assert "expired_at" in payload["context"]
    assert calls == []


def test_current_identity_outside_guard_fails(flask_app: Flask) -> None:
    with flask_app.test_request_context("/whoami"):
        with pytest.raises(RuntimeError):
            current_identity()
