from tortoise import fields
from tortoise.models import Model


class AdminUser(Model):
    id = fields.IntField(primary_key=True)
    email = fields.CharField(max_length=255, unique=True)
    name = fields.CharField(max_length=255, null=True)
    password_hash = fields.CharField(
        max_length=255, description="Salted scrypt hash, see core.security"
    )
    role = fields.CharField(max_length=50, default="admin")
    last_login = fields.DatetimeField(null=True)

    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "fs_admin_users"

    def __str__(self) -> str:
        return f"<AdminUser(id={self.id}, email='{self.email}', role='{self.role}')>"
