import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError

from taskkeeper.config import Settings
from taskkeeper.core.security.password import check_password, hash_password
from taskkeeper.core.security.token import create_access_token, decode_access_token
from taskkeeper.exceptions.http import ConflictError, InvalidCredentialsError
from taskkeeper.models.definitions import User
from taskkeeper.repositories import UserRepository
from taskkeeper.schemas import AuthResponse, LoginRequest, PublicUser, RegisterRequest

from ._validation import coerce_input

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "User with this email already exists"
USERNAME_TAKEN = "Username is already taken"
INVALID_LOGIN = "Invalid email or password"


class AuthService:
    def __init__(self, user_repo: UserRepository, settings: Settings):
        self._user_repo = user_repo
        self._settings = settings

    # --- 1. USER REGISTRATION ---

    async def register(self, data: RegisterRequest | Mapping[str, Any]) -> AuthResponse:
        """
        Registers a new user and issues a token for it.
        Duplicate email and duplicate username are reported with separate messages.
        """
        request = coerce_input(RegisterRequest, data)

        if await self._user_repo.get_by_email(request.email):
            raise ConflictError(EMAIL_TAKEN)

        if await self._user_repo.get_by_username(request.username):
            raise ConflictError(USERNAME_TAKEN)

        new_user_data = request.model_dump(exclude={"password"})
        new_user_data["password_hash"] = hash_password(request.password, rounds=self._settings.password_hash_rounds)

        # A concurrent registration can still win the unique constraint between
        # the checks above and this flush. The session is unusable afterwards,
        # so the field is read from the driver's error text.
        try:
            created_user = await self._user_repo.create(new_user_data)
        except IntegrityError as exc:
            logger.warning("Registration for %s lost a unique-constraint race", request.email)
            if "email" in str(exc.orig).lower():
                raise ConflictError(EMAIL_TAKEN) from exc
            raise ConflictError(USERNAME_TAKEN) from exc

        logger.info("Registered user %s (%s)", created_user.id, created_user.username)
        return self._issue(created_user)

    # --- 2. USER AUTHENTICATION ---

    async def login(self, data: LoginRequest | Mapping[str, Any]) -> AuthResponse:
        """
        Authenticates by email and password.
        Unknown email and wrong password fail with the same error and message.
        """
        credentials = coerce_input(LoginRequest, data)

        user_orm = await self._user_repo.get_by_email(credentials.email)
        if not user_orm or not check_password(credentials.password, user_orm.password_hash):
            logger.warning("Rejected login attempt for %s", credentials.email)
            raise InvalidCredentialsError(INVALID_LOGIN)

        logger.info("User %s logged in", user_orm.id)
        return self._issue(user_orm)

    # --- 3. TOKEN RESOLUTION ---

    async def resolve_user_id(self, token: str) -> int:
        """
        Maps a bearer token to exactly one existing user id.

        Raises:
            InvalidCredentialsError: the token is invalid, expired, or names a user that no longer exists.
        """
        user_id = decode_access_token(
            token, secret_key=self._settings.secret_key, algorithm=self._settings.algorithm
        )
        if await self._user_repo.get_by_id(user_id) is None:
            raise InvalidCredentialsError("Invalid or expired token")
        return user_id

    def _issue(self, user: User) -> AuthResponse:
        token = create_access_token(
            user.id,
            secret_key=self._settings.secret_key,
            algorithm=self._settings.algorithm,
            expires_minutes=self._settings.access_token_expire_minutes,
        )
        return AuthResponse(user=PublicUser.model_validate(user), token=token)
