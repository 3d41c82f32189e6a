"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from socialnet.application.services.credentials import CredentialStore, WerkzeugPasswordHasher
from socialnet.application.services.post_mutator import PostMutator
from socialnet.application.services.token_service import JwtTokenService
from socialnet.application.use_cases.posts.comments import AddCommentUseCase, RemoveCommentUseCase
from socialnet.application.use_cases.posts.create_post import CreatePostUseCase
from socialnet.application.use_cases.posts.delete_post import DeletePostUseCase
from socialnet.application.use_cases.posts.like_post import LikePostUseCase, UnlikePostUseCase
from socialnet.application.use_cases.posts.list_posts import GetPostUseCase, ListPostsUseCase
from socialnet.application.use_cases.profiles.delete_account import DeleteAccountUseCase
from socialnet.application.use_cases.profiles.get_profile import GetProfileUseCase, ListProfilesUseCase
from socialnet.application.use_cases.profiles.save_profile import SaveProfileUseCase
from socialnet.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from socialnet.application.use_cases.users.login_user import LoginUserUseCase
from socialnet.application.use_cases.users.register_user import RegisterUserUseCase
from socialnet.infrastructure.auth.login_attempts import LoginAttemptsTracker
from socialnet.infrastructure.db import Database
from socialnet.infrastructure.repositories.posts.sqlalchemy_post_repository import (
    SqlAlchemyPostRepository,
)
from socialnet.infrastructure.repositories.profiles.sqlalchemy_profile_repository import (
    SqlAlchemyProfileRepository,
)
from socialnet.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from socialnet.interfaces.http.controllers.misc_controller import MiscController
from socialnet.interfaces.http.controllers.posts_controller import PostsController
from socialnet.interfaces.http.controllers.profiles_controller import ProfilesController
from socialnet.interfaces.http.controllers.users_controller import UsersController
from socialnet.interfaces.http.guard import AccessGuard
from socialnet.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig, database: Database) -> None:
        self.config = config
        self.database = database

    # Services

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(
            secret=self.config.secret_key,
            algorithm=self.config.auth.jwt_algorithm,
            ttl_seconds=self.config.auth.token_ttl_seconds,
        )

    @cached_property
    def login_attempts(self) -> LoginAttemptsTracker:
        return LoginAttemptsTracker.from_config(self.config.auth)

    @cached_property
    def access_guard(self) -> AccessGuard:
        return AccessGuard(self.token_service)

    # Repositories

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def post_repository(self) -> SqlAlchemyPostRepository:
        return SqlAlchemyPostRepository(self.database)

    @cached_property
    def profile_repository(self) -> SqlAlchemyProfileRepository:
        return SqlAlchemyProfileRepository(self.database)

    @cached_property
    def credential_store(self) -> CredentialStore:
        return CredentialStore(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def post_mutator(self) -> PostMutator:
        return PostMutator(posts=self.post_repository, config=self.config.store)

    # Controllers

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            register_use_case=RegisterUserUseCase(
                users=self.user_repository,
                password_hasher=self.password_hasher,
            ),
            login_use_case=LoginUserUseCase(
                credentials=self.credential_store,
                tokens=self.token_service,
                attempts=self.login_attempts,
            ),
            current_user_use_case=GetCurrentUserUseCase(users=self.user_repository),
            tokens=self.token_service,
            guard=self.access_guard,
            security=self.config.security,
        )

    @cached_property
    def posts_controller(self) -> PostsController:
        return PostsController(
            guard=self.access_guard,
            list_use_case=ListPostsUseCase(posts=self.post_repository),
            get_use_case=GetPostUseCase(posts=self.post_repository),
            create_use_case=CreatePostUseCase(
                posts=self.post_repository,
                content=self.config.content,
            ),
            delete_use_case=DeletePostUseCase(posts=self.post_repository),
            like_use_case=LikePostUseCase(mutator=self.post_mutator),
            unlike_use_case=UnlikePostUseCase(mutator=self.post_mutator),
            add_comment_use_case=AddCommentUseCase(
                mutator=self.post_mutator,
                content=self.config.content,
            ),
            remove_comment_use_case=RemoveCommentUseCase(mutator=self.post_mutator),
        )

    @cached_property
    def profiles_controller(self) -> ProfilesController:
        return ProfilesController(
            guard=self.access_guard,
            get_use_case=GetProfileUseCase(profiles=self.profile_repository),
            list_use_case=ListProfilesUseCase(profiles=self.profile_repository),
            save_use_case=SaveProfileUseCase(profiles=self.profile_repository),
            delete_account_use_case=DeleteAccountUseCase(
                users=self.user_repository,
                profiles=self.profile_repository,
            ),
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database=self.database)
