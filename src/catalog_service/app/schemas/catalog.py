from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(default=1, ge=1, description="1-based page number")
    page_size: int = Field(
        default=10, ge=1, le=100, alias="pageSize", description="Rows per page"
    )


class ItemCreate(BaseModel):
    """Writable item fields; any other key is rejected"""

    model_config = ConfigDict(extra="forbid")

    item_name: str = Field(..., min_length=1, max_length=255)
    item_description: str | None = None
    item_sku: str | None = Field(None, max_length=64)
    item_price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)


class ItemUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    item_name: str | None = Field(None, min_length=1, max_length=255)
    item_description: str | None = None
    item_sku: str | None = Field(None, max_length=64)
    item_price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)

    @field_validator("item_name")
    @classmethod
    def item_name_not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("item_name cannot be null")
        return value


class ItemOut(BaseModel):
    item_id: int
    item_name: str
    item_description: str | None = None
    item_sku: str | None = None
    item_price: Decimal | None = None
    item_created_at: datetime | None = None
    item_updated_at: datetime | None = None

    @classmethod
    def from_model(cls, item) -> "ItemOut":
        return cls(
            item_id=item.item_id,
            item_name=item.name,
            item_description=item.description,
            item_sku=item.sku,
            item_price=item.price,
            item_created_at=item.created_at,
            item_updated_at=item.updated_at,
        )


class ItemListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    page: int
    page_size: int = Field(..., alias="pageSize")
    data: list[ItemOut]


class ItemCreatedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    inserted_id: int = Field(..., alias="insertedId")


class ItemUpdatedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    affected_rows: int = Field(..., alias="affectedRows")


class MessageResponse(BaseModel):
    message: str


class KeywordOut(BaseModel):
    keyword_id: int
    keyword_name: str

    @classmethod
    def from_model(cls, keyword) -> "KeywordOut":
        return cls(keyword_id=keyword.keyword_id, keyword_name=keyword.name)


class AttachmentUrl(BaseModel):
    original: str
    custom: str


class AttachmentOut(BaseModel):
    attachment_id: int
    attachment_url: AttachmentUrl


class ItemDetail(ItemOut):
    keywords: list[KeywordOut] = Field(default_factory=list)
    attachments: list[AttachmentOut] = Field(default_factory=list)


class ItemDetailResponse(BaseModel):
    message: str
    data: ItemDetail


class KeywordCreate(BaseModel):
    keyword_name: str = Field(..., min_length=1, max_length=255)


class KeywordsCreatedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    inserted_rows: int = Field(..., alias="insertedRows")


class KeywordSearchRequest(PageRequest):
    keyword_name: str | None = Field(None, description="Substring to search for")


class KeywordListResponse(BaseModel):
    message: str
    data: list[KeywordOut]


class KeywordRef(BaseModel):
    keyword_id: Any = None


class ItemKeywords(BaseModel):
    item_id: int
    item_name: str
    keywords: list[KeywordOut]


class ItemKeywordsResponse(BaseModel):
    message: str
    data: ItemKeywords


class KeywordsLinkedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    linked_keywords: list[int] = Field(..., alias="linkedKeywords")
