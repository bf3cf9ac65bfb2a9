# app/models/user.py
"""
Database model for users.
Represents a registered account: credentials, display name and derived avatar.
"""
import uuid
from tortoise import fields, models

class User(models.Model):
    """
    User database model.

    Relationships:
    - Has at most one Profile (one-to-one, via related_name="profile")
    - Has many Posts (one-to-many, via related_name="posts")

    Security:
    - Password is stored as a hash (never store plain text passwords)
    - Email is unique and stored lowercased
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: opaque user identifier
    name = fields.CharField(max_length=128)
    email = fields.CharField(
        max_length=256,
        unique=True,
        index=True
    )  # Login email (normalized to lowercase, unique, indexed for fast lookups)
    password_hash = fields.CharField(max_length=255)  # Argon2 hash, never returned by the API
    avatar = fields.CharField(max_length=512, null=True)  # Gravatar URL derived from the email
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"
