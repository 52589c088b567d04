# app/services/auth_service.py
from uuid import UUID

import jwt

from app.data.models.user import UserModel
from app.data.unit_of_work import UnitOfWork
from app.domain.errors import InvalidCredentials
from app.domain.schemas import RegisterIn
from app.utils.security import (
    hash_password,
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)


class AuthService:
    """Cienka warstwa tozsamosci: rejestracja, logowanie, odswiezanie tokenow."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def register(self, payload: RegisterIn) -> dict:
        with self.uow.transaction():
            user = self.uow.users.create_user(
                UserModel(
                    name=payload.name,
                    email=payload.email.lower(),
                    password_hash=hash_password(payload.password),
                    role=payload.role.value,
                )
            )
        logger.info(f"Registered user {user.id} with role {user.role}")
        return self._auth_payload(user)

    def login(self, email: str, password: str) -> dict:
        with self.uow.transaction():
            user = self.uow.users.get_by_email(email.lower())

        if not user or user.is_deleted or not verify_password(password, user.password_hash):
            raise InvalidCredentials()

        return self._auth_payload(user)

    def refresh(self, refresh_token: str) -> dict:
        try:
            claims = decode_refresh_token(refresh_token)
        except jwt.PyJWTError as e:
            raise InvalidCredentials("Invalid refresh token") from e

        with self.uow.transaction():
            user = self.uow.users.get_user(_parse_uuid(claims.get("sub")))

        if not user or user.is_deleted:
            raise InvalidCredentials("Invalid refresh token")

        return {
            "access_token": create_access_token(user.id, user.role),
            "refresh_token": create_refresh_token(user.id, user.role),
        }

    def _auth_payload(self, user: UserModel) -> dict:
        return {
            "user": user,
            "access_token": create_access_token(user.id, user.role),
            "refresh_token": create_refresh_token(user.id, user.role),
        }


def _parse_uuid(value) -> UUID:
    try:
        return UUID(value)
    except (TypeError, ValueError) as e:
        raise InvalidCredentials("Invalid refresh token") from e
