from .admin_user import AdminUser
from .attachment import Attachment, AttachmentKind
from .item import Item
from .keyword import Keyword

__all__ = [
    "AdminUser",
    "Attachment",
    "AttachmentKind",
    "Item",
    "Keyword",
]
