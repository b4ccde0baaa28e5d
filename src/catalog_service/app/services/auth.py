from loguru import logger
from tortoise import timezone

from ..core.config import Settings
from ..core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from ..models import AdminUser
from .domain import AuthenticatedAdmin, LoginResult


class AuthService:
    def __init__(self, settings: Settings):
        self.settings = settings

    async def authenticate(self, email: str, password: str) -> LoginResult | None:
        user = await AdminUser.get_or_none(email=email)

        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login attempt for {email}")
            return None

        user.last_login = timezone.now()
        await user.save(update_fields=["last_login"])

        token = create_access_token(self.settings, user.id, user.email, user.role)
        logger.info(f"Admin {user.id} logged in")

        return LoginResult(
            token=token,
            admin_id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            last_login=user.last_login,
        )

    def resolve_token(self, token: str) -> AuthenticatedAdmin:
        claims = decode_access_token(self.settings, token)
        return AuthenticatedAdmin(
            id=int(claims["sub"]),
            email=claims.get("email", ""),
            role=claims.get("role", ""),
        )

    async def create_admin(
        self, email: str, password: str, name: str | None = None, role: str = "admin"
    ) -> AdminUser:
        user = await AdminUser.create(
            email=email,
            name=name,
            role=role,
            password_hash=hash_password(password),
        )
        logger.info(f"Created admin user {user.id} ({email})")
        return user
