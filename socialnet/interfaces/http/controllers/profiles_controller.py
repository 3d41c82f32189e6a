# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from socialnet.application.use_cases.profiles.delete_account import DeleteAccountUseCase
from socialnet.application.use_cases.profiles.get_profile import GetProfileUseCase, ListProfilesUseCase
from socialnet.application.use_cases.profiles.save_profile import ProfileInput, SaveProfileUseCase
from socialnet.domain.profiles.entities import Profile
from socialnet.infrastructure.audit import AuditAction, audit_log
from socialnet.interfaces.http.dto.posts import DeletedDTO
from socialnet.interfaces.http.dto.profiles import ProfileDTO, ProfileRequestDTO
from socialnet.interfaces.http.guard import AccessGuard, client_ip, current_identity
from socialnet.shared.errors.validation import parse_body


def _dump(profile: Profile) -> dict:
    return ProfileDTO.model_validate(profile).model_dump(mode="json")


class ProfilesController:
    def __init__(
        self,
        *,
        guard: AccessGuard,
        get_use_case: GetProfileUseCase,
        list_use_case: ListProfilesUseCase,
        save_use_case: SaveProfileUseCase,
        delete_account_use_case: DeleteAccountUseCase,
    ) -> None:
        self._guard = guard
        self._get_use_case = get_use_case
        self._list_use_case = list_use_case
        self._save_use_case = save_use_case
        self._delete_account_use_case = delete_account_use_case

    def current(self) -> tuple[Response, int]:
        return jsonify(_dump(self._get_use_case.by_user(current_identity().user_id))), 200

    def list_all(self) -> tuple[Response, int]:
        return jsonify([_dump(p) for p in self._list_use_case.execute()]), 200

    def by_handle(self, handle: str) -> tuple[Response, int]:
        return jsonify(_dump(self._get_use_case.by_handle(handle))), 200

    def by_user(self, user_id: int) -> tuple[Response, int]:
        return jsonify(_dump(self._get_use_case.by_user(user_id))), 200

    def save(self) -> tuple[Response, int]:
        dto = parse_body(ProfileRequestDTO, request.get_json(silent=True))
        identity = current_identity()
        profile = self._save_use_case.execute(
            identity.user_id,
            ProfileInput(
                handle=dto.handle,
                status=dto.status,
                skills=dto.skills,
                company=dto.company,
                website=dto.website,
                location=dto.location,
                bio=dto.bio,
                github_username=dto.github_username,
                social=dto.social(),
            ),
        )
        audit_log(
            AuditAction.PROFILE_SAVED,
            user_id=identity.user_id,
            ip_address=client_ip(),
            details={"handle": profile.handle},
        )
        return jsonify(_dump(profile)), 200

    def delete_account(self) -> tuple[Response, int]:
        identity = current_identity()
        self._delete_account_use_case.execute(identity.user_id)
        audit_log(
            AuditAction.ACCOUNT_DELETED,
            user_id=identity.user_id,
            ip_address=client_ip(),
        )
        return jsonify(DeletedDTO().model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        guarded = self._guard.protect

        bp = Blueprint("profiles", __name__, url_prefix="/api/profile")
        bp.add_url_rule("", endpoint="current", view_func=guarded(self.current), methods=["GET"])
        bp.add_url_rule("", endpoint="save", view_func=guarded(self.save), methods=["POST"])
        bp.add_url_rule(
            "", endpoint="delete_account", view_func=guarded(self.delete_account), methods=["DELETE"]
        )
        bp.add_url_rule("/all", view_func=self.list_all, methods=["GET"])
        bp.add_url_rule("/handle/<handle>", view_func=self.by_handle, methods=["GET"])
        bp.add_url_rule("/user/<int:user_id>", view_func=self.by_user, methods=["GET"])
        return bp
