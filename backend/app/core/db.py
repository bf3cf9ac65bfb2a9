# app/core/db.py
"""
Database configuration and initialization module.
Handles Tortoise ORM setup, database connection, and migration configuration.
"""
import logging
from tortoise import Tortoise

from app.config import settings

logger = logging.getLogger("uvicorn.error")

# Database connection URL (PostgreSQL in production, SQLite in tests)
DB_URL = settings.database_url

# Tortoise ORM configuration dictionary
# This configuration is also used by Aerich for database migrations
TORTOISE_ORM = {
    "connections": {"default": DB_URL},
    "apps": {
        "models": {
            "models": [
                "app.models.user",           # User model
                "app.models.profile",        # Profile model
                "app.models.post",           # Post model
                "aerich.models",             # Required: Let Aerich manage migration tables
            ],
            "default_connection": "default",
        },
    },
}

async def init_db():
    """
    Initialize Tortoise ORM database connection.

    This function should be called during application startup to establish
    the database connection and register all models.

    Schemas are managed by Aerich migrations; set DB_GENERATE_SCHEMAS=true to
    create missing tables directly during development.
    """
    await Tortoise.init(config=TORTOISE_ORM)
    if settings.generate_schemas:
        logger.warning("[db] DB_GENERATE_SCHEMAS enabled -> generating missing tables")
        await Tortoise.generate_schemas(safe=True)

async def close_db():
    """
    Close all database connections.
    """
    await Tortoise.close_connections()
