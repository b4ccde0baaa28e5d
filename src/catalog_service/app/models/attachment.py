from enum import IntEnum

from tortoise import fields
from tortoise.models import Model


class AttachmentKind(IntEnum):
    ITEM_IMAGE = 0


class Attachment(Model):
    attachment_id = fields.IntField(primary_key=True)
    item = fields.ForeignKeyField(
        "models.Item",
        related_name="attachments",
        on_delete=fields.CASCADE,
        source_field="attachment_record_id",
    )
    name = fields.CharField(
        max_length=255,
        unique=True,
        source_field="attachment_name",
        description="Storage name of the original in the image store",
    )
    kind = fields.IntEnumField(
        AttachmentKind, default=AttachmentKind.ITEM_IMAGE, source_field="attachment_type"
    )

    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "fs_attachments"

    def __str__(self) -> str:
        return f"<Attachment(id={self.attachment_id}, name='{self.name}')>"
