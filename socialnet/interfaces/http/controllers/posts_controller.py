# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math

from flask import Blueprint, Response, jsonify, request

from socialnet.application.use_cases.posts.comments import AddCommentUseCase, RemoveCommentUseCase
from socialnet.application.use_cases.posts.create_post import CreatePostUseCase
from socialnet.application.use_cases.posts.delete_post import DeletePostUseCase
from socialnet.application.use_cases.posts.like_post import LikePostUseCase, UnlikePostUseCase
from socialnet.application.use_cases.posts.list_posts import GetPostUseCase, ListPostsUseCase
from socialnet.domain.posts.entities import Post
from socialnet.infrastructure.audit import AuditAction, audit_log
from socialnet.interfaces.http.dto.posts import (
    CommentRequestDTO,
    CreatePostRequestDTO,
    DeletedDTO,
    PostDTO,
)
from socialnet.interfaces.http.guard import AccessGuard, client_ip, current_identity
from socialnet.shared.errors.base import ValidationError
from socialnet.shared.errors.validation import parse_body

DEADLINE_HEADER = "X-Request-Timeout"


def request_deadline() -> float | None:
    """Seconds the caller is willing to wait for a mutation, if it said so."""

    raw = request.headers.get(DEADLINE_HEADER)
    if raw is None or not raw.strip():
        return None
    try:
        seconds = float(raw)
    except ValueError:
        raise ValidationError.for_field(DEADLINE_HEADER, "not_a_number") from None
    if not math.isfinite(seconds) or seconds <= 0:
        raise ValidationError.for_field(DEADLINE_HEADER, "not_positive")
    return seconds


def _post_response(post: Post, status: int = 200) -> tuple[Response, int]:
    return jsonify(PostDTO.model_validate(post).model_dump(mode="json")), status


class PostsController:
    def __init__(
        self,
        *,
        guard: AccessGuard,
        list_use_case: ListPostsUseCase,
        get_use_case: GetPostUseCase,
        create_use_case: CreatePostUseCase,
        delete_use_case: DeletePostUseCase,
        like_use_case: LikePostUseCase,
        unlike_use_case: UnlikePostUseCase,
        add_comment_use_case: AddCommentUseCase,
        remove_comment_use_case: RemoveCommentUseCase,
    ) -> None:
        self._guard = guard
        self._list_use_case = list_use_case
        self._get_use_case = get_use_case
        self._create_use_case = create_use_case
        self._delete_use_case = delete_use_case
        self._like_use_case = like_use_case
        self._unlike_use_case = unlike_use_case
        self._add_comment_use_case = add_comment_use_case
        self._remove_comment_use_case = remove_comment_use_case

    def list_posts(self) -> tuple[Response, int]:
        posts = self._list_use_case.execute()
        return jsonify([PostDTO.model_validate(p).model_dump(mode="json") for p in posts]), 200

    def get_post(self, post_id: int) -> tuple[Response, int]:
        return _post_response(self._get_use_case.execute(post_id))

    def create_post(self) -> tuple[Response, int]:
        dto = parse_body(CreatePostRequestDTO, request.get_json(silent=True))
        post = self._create_use_case.execute(current_identity(), dto.text or "")
        return _post_response(post, 201)

    def delete_post(self, post_id: int) -> tuple[Response, int]:
        identity = current_identity()
        self._delete_use_case.execute(post_id, identity.user_id)
        audit_log(
            AuditAction.POST_DELETED,
            user_id=identity.user_id,
            ip_address=client_ip(),
            details={"post_id": post_id},
        )
        return jsonify(DeletedDTO().model_dump()), 200

    def like(self, post_id: int) -> tuple[Response, int]:
        post = self._like_use_case.execute(
            post_id, current_identity().user_id, deadline=request_deadline()
        )
        return _post_response(post)

    def unlike(self, post_id: int) -> tuple[Response, int]:
        post = self._unlike_use_case.execute(
            post_id, current_identity().user_id, deadline=request_deadline()
        )
        return _post_response(post)

    def add_comment(self, post_id: int) -> tuple[Response, int]:
        dto = parse_body(CommentRequestDTO, request.get_json(silent=True))
        post = self._add_comment_use_case.execute(
            post_id, current_identity(), dto.text or "", deadline=request_deadline()
        )
        return _post_response(post, 201)

    def remove_comment(self, post_id: int, comment_id: str) -> tuple[Response, int]:
        identity = current_identity()
        post = self._remove_comment_use_case.execute(
            post_id, comment_id, identity.user_id, deadline=request_deadline()
        )
        audit_log(
            AuditAction.COMMENT_REMOVED,
            user_id=identity.user_id,
            ip_address=client_ip(),
            details={"post_id": post_id, "comment_id": comment_id},
        )
        return _post_response(post)

    def as_blueprint(self) -> Blueprint:
        guarded = self._guard.protect

        bp = Blueprint("posts", __name__, url_prefix="/api/posts")
        bp.add_url_rule("", view_func=self.list_posts, methods=["GET"])
        bp.add_url_rule("", endpoint="create_post", view_func=guarded(self.create_post), methods=["POST"])
        bp.add_url_rule("/<int:post_id>", view_func=self.get_post, methods=["GET"])
        bp.add_url_rule(
            "/<int:post_id>", endpoint="delete_post", view_func=guarded(self.delete_post), methods=["DELETE"]
        )
        bp.add_url_rule("/like/<int:post_id>", view_func=guarded(self.like), methods=["POST"])
        bp.add_url_rule("/unlike/<int:post_id>", view_func=guarded(self.unlike), methods=["POST"])
        bp.add_url_rule(
            "/comment/<int:post_id>", view_func=guarded(self.add_comment), methods=["POST"]
        )
        bp.add_url_rule(
            "/comment/<int:post_id>/<comment_id>",
            view_func=guarded(self.remove_comment),
            methods=["DELETE"],
        )
        return bp
