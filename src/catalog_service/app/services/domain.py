from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class OriginalImage:
    storage_name: str
    media_type: str
    size_bytes: int
    owner_entity_id: str
    width: int
    height: int


@dataclass(frozen=True)
class StoredOriginal:
    path: Path
    media_type: str


@dataclass(frozen=True)
class AttachmentUrls:
    original: str
    custom: str
    derivative_template: str


@dataclass
class AuthenticatedAdmin:
    id: int
    email: str
    role: str


@dataclass
class LoginResult:
    token: str
    admin_id: int
    email: str
    name: str | None
    role: str
    last_login: datetime | None
