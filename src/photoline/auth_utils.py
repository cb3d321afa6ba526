import uuid
from dataclasses import dataclass

import jwt
from fastapi import Depends, HTTPException, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.orm import Session

from photoline.db import get_db
from photoline.models.sharelink import SharedLink
from photoline.models.user import User
from photoline.repositories.sharelink_repository import SharedLinkRepository
from photoline.repositories.user_repository import UserRepository


class AuthSettings(BaseSettings):
    """Settings for authentication, loaded from environment variables."""

    jwt_secret_key: str
    jwt_algorithm: str = "HS256"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


authsettings = AuthSettings()

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """The principal a request runs as.

    For an anonymous shared-link viewer ``user`` is the account that created
    the link and ``shared_link`` is set.
    """

    user: User
    shared_link: SharedLink | None = None

    @property
    def user_id(self) -> uuid.UUID:
        return self.user.id

    @property
    def is_shared_link(self) -> bool:
        return self.shared_link is not None

    @property
    def shows_metadata(self) -> bool:
        return self.shared_link is None or self.shared_link.show_exif


def get_current_user(credentials: HTTPAuthorizationCredentials | None, db: Session) -> User:
    if not credentials:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = jwt.decode(credentials.credentials, authsettings.jwt_secret_key, algorithms=[authsettings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired") from None
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token") from None

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token")
    try:
        parsed_id = uuid.UUID(user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="User not found") from None

    user = UserRepository(db).get_user_by_id(parsed_id)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user


def get_auth(
    key: str | None = Query(None, description="Shared link key for anonymous viewers"),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> AuthContext:
    """Resolve the principal. A shared-link key takes precedence over a bearer token."""
    if key:
        shared_link = SharedLinkRepository(db).get_valid_shared_link(key)
        if not shared_link:
            raise HTTPException(status_code=401, detail="Invalid share key")
        return AuthContext(user=shared_link.user, shared_link=shared_link)
    return AuthContext(user=get_current_user(credentials, db))


def require_account(auth: AuthContext = Depends(get_auth)) -> AuthContext:
    """For routes anonymous shared-link viewers may not use."""
    if auth.is_shared_link:
        raise HTTPException(status_code=403, detail="Not available to shared link viewers")
    return auth
