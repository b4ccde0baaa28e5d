from tortoise import fields
from tortoise.models import Model


class Item(Model):
    item_id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=255, source_field="item_name")
    description = fields.TextField(null=True, source_field="item_description")
    sku = fields.CharField(max_length=64, null=True, source_field="item_sku")
    price = fields.DecimalField(
        max_digits=10, decimal_places=2, null=True, source_field="item_price"
    )

    created_at = fields.DatetimeField(auto_now_add=True, source_field="item_created_at")
    updated_at = fields.DatetimeField(auto_now=True, source_field="item_updated_at")

    keywords: fields.ManyToManyRelation["Keyword"] = fields.ManyToManyField(
        "models.Keyword",
        related_name="items",
        through="fs_items_to_keywords",
        forward_key="keyword_id",
        backward_key="item_id",
    )
    attachments = fields.ReverseRelation["Attachment"]

    class Meta:
        table = "fs_items"

    def __str__(self) -> str:
        return f"<Item(id={self.item_id}, name='{self.name}')>"
