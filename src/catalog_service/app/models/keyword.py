from tortoise import fields
from tortoise.models import Model


class Keyword(Model):
    keyword_id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=255, source_field="keyword_name")

    items: fields.ManyToManyRelation["Item"]

    class Meta:
        table = "fs_keywords"

    def __str__(self) -> str:
        return f"<Keyword(id={self.keyword_id}, name='{self.name}')>"
