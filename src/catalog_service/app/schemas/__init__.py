from .auth import AdminUserOut, LoginRequest, LoginResponse
from .catalog import (
    AttachmentOut,
    AttachmentUrl,
    ItemCreate,
    ItemCreatedResponse,
    ItemDetail,
    ItemDetailResponse,
    ItemKeywords,
    ItemKeywordsResponse,
    ItemListResponse,
    ItemOut,
    ItemUpdate,
    ItemUpdatedResponse,
    KeywordCreate,
    KeywordListResponse,
    KeywordOut,
    KeywordRef,
    KeywordSearchRequest,
    KeywordsCreatedResponse,
    KeywordsLinkedResponse,
    MessageResponse,
    PageRequest,
)
from .image import ImageUploadResponse

__all__ = [
    "AdminUserOut",
    "LoginRequest",
    "LoginResponse",
    "AttachmentOut",
    "AttachmentUrl",
    "ItemCreate",
    "ItemCreatedResponse",
    "ItemDetail",
    "ItemDetailResponse",
    "ItemKeywords",
    "ItemKeywordsResponse",
    "ItemListResponse",
    "ItemOut",
    "ItemUpdate",
    "ItemUpdatedResponse",
    "KeywordCreate",
    "KeywordListResponse",
    "KeywordOut",
    "KeywordRef",
    "KeywordSearchRequest",
    "KeywordsCreatedResponse",
    "KeywordsLinkedResponse",
    "MessageResponse",
    "PageRequest",
    "ImageUploadResponse",
]
