# app/models/post.py
import uuid
from tortoise import fields, models

class Post(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    user = fields.ForeignKeyField(
        "models.User",
        related_name="posts",
        on_delete=fields.CASCADE
    )
    text = fields.TextField()

    # Author name/avatar as they were when the post was written (not kept in sync)
    name = fields.CharField(max_length=128, null=True)
    avatar = fields.CharField(max_length=512, null=True)

    created_at = fields.DatetimeField(auto_now_add=True, index=True)

    class Meta:
        table = "posts"
