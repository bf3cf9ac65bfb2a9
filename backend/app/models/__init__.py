# app/models/__init__.py
"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: Account and credential model
- Profile: Developer profile (one per user)
- Post: Text post written by a user
"""
from .user import User
from .profile import Profile
from .post import Post
