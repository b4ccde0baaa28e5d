from typing import Any, Iterable

from loguru import logger
from tortoise import timezone
from tortoise.transactions import in_transaction

from ..models import Attachment, AttachmentKind, Item, Keyword
from ..schemas import (
    AttachmentOut,
    AttachmentUrl,
    ItemDetail,
    ItemKeywords,
    ItemOut,
    KeywordOut,
)
from .derivative_delivery import DerivativeDeliveryService
from .domain import OriginalImage
from .field_allowlist import ITEM_FIELDS


def parse_keyword_ids(raw_ids: Iterable[Any]) -> list[int]:
    keyword_ids = []
    for raw in raw_ids:
        try:
            keyword_id = int(raw)
        except (TypeError, ValueError):
            continue
        if keyword_id not in keyword_ids:
            keyword_ids.append(keyword_id)
    return keyword_ids


class CatalogService:
    def __init__(self, derivative_delivery: DerivativeDeliveryService):
        self.derivative_delivery = derivative_delivery

    async def list_items(self, page: int, page_size: int) -> list[ItemOut]:
        offset = (page - 1) * page_size
        items = await Item.all().order_by("item_id").offset(offset).limit(page_size)
        return [ItemOut.from_model(item) for item in items]

    async def item_exists(self, item_id: int) -> bool:
        return await Item.filter(item_id=item_id).exists()

    async def get_item_detail(self, item_id: int) -> ItemDetail | None:
        item = await Item.get_or_none(item_id=item_id)
        if item is None:
            return None

        keywords = await item.keywords.all().order_by("keyword_id")
        attachments = await Attachment.filter(item_id=item_id).order_by("attachment_id")

        return ItemDetail(
            **ItemOut.from_model(item).model_dump(),
            keywords=[KeywordOut.from_model(keyword) for keyword in keywords],
            attachments=[self._attachment_out(attachment) for attachment in attachments],
        )

    def _attachment_out(self, attachment: Attachment) -> AttachmentOut:
        urls = self.derivative_delivery.urls_for(attachment.name)
        return AttachmentOut(
            attachment_id=attachment.attachment_id,
            attachment_url=AttachmentUrl(original=urls.original, custom=urls.custom),
        )

    async def add_item(self, values: dict[str, Any]) -> Item:
        item = await Item.create(**ITEM_FIELDS.to_attributes(values))
        logger.info(f"Created item {item.item_id}")
        return item

    async def update_item(self, item_id: int, values: dict[str, Any]) -> int:
        attributes = ITEM_FIELDS.to_attributes(values)
        affected = await Item.filter(item_id=item_id).update(
            **attributes, updated_at=timezone.now()
        )
        logger.info(f"Updated item {item_id}: {sorted(values)} ({affected} rows)")
        return affected

    async def delete_item(self, item_id: int) -> int:
        deleted = await Item.filter(item_id=item_id).delete()
        if deleted:
            logger.info(f"Deleted item {item_id}")
        return deleted

    async def add_keywords(self, names: list[str]) -> int:
        async with in_transaction():
            await Keyword.bulk_create([Keyword(name=name) for name in names])
        logger.info(f"Added {len(names)} keywords")
        return len(names)

    async def search_keywords(
        self, term: str | None, page: int, page_size: int
    ) -> list[KeywordOut]:
        query = Keyword.all()
        if term:
            query = query.filter(name__icontains=term)

        offset = (page - 1) * page_size
        keywords = await query.order_by("keyword_id").offset(offset).limit(page_size)
        return [KeywordOut.from_model(keyword) for keyword in keywords]

    async def get_item_keywords(self, item_id: int) -> ItemKeywords | None:
        item = await Item.get_or_none(item_id=item_id)
        if item is None:
            return None

        keywords = await item.keywords.all().order_by("keyword_id")
        if not keywords:
            return None

        return ItemKeywords(
            item_id=item.item_id,
            item_name=item.name,
            keywords=[KeywordOut.from_model(keyword) for keyword in keywords],
        )

    async def link_keywords(self, item_id: int, keyword_ids: list[int]) -> list[int] | None:
        item = await Item.get_or_none(item_id=item_id)
        if item is None:
            return None

        keywords = await Keyword.filter(keyword_id__in=keyword_ids)
        if keywords:
            # ManyToManyRelation.add skips pairs that are already linked
            await item.keywords.add(*keywords)

        linked = sorted(keyword.keyword_id for keyword in keywords)
        logger.info(f"Linked keywords {linked} to item {item_id}")
        return linked

    async def record_attachment(
        self, item_id: int, original: OriginalImage
    ) -> Attachment:
        attachment = await Attachment.create(
            item_id=item_id,
            name=original.storage_name,
            kind=AttachmentKind.ITEM_IMAGE,
        )
        logger.info(
            f"Recorded attachment {attachment.attachment_id} "
            f"({original.storage_name}) for item {item_id}"
        )
        return attachment
