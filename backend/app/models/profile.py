# app/models/profile.py
"""
Database model for developer profiles.
A profile belongs to exactly one user; experience and education entries are
embedded as JSON lists ordered most-recent-first.
"""
import uuid
from tortoise import fields, models

class Profile(models.Model):
    """
    Profile database model.

    Relationships:
    - Belongs to one User (one-to-one). The unique key on user_id is what
      guarantees at most one profile per owner, including under concurrent upserts.

    Embedded lists:
    - skills: list[str]
    - social: dict[str, str] (youtube, twitter, facebook, linkedin, instagram)
    - experience / education: list[dict], each entry carrying its own "id"
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    user = fields.OneToOneField(
        "models.User",
        related_name="profile",
        on_delete=fields.CASCADE
    )
    company = fields.CharField(max_length=256, null=True)
    website = fields.CharField(max_length=512, null=True)
    location = fields.CharField(max_length=256, null=True)
    status = fields.CharField(max_length=128)
    skills = fields.JSONField(default=list)
    bio = fields.TextField(null=True)
    githubusername = fields.CharField(max_length=128, null=True)
    social = fields.JSONField(default=dict)
    experience = fields.JSONField(default=list)
    education = fields.JSONField(default=list)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "profiles"
