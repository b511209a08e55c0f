"""
Base schemas for all models.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Immutable once built (records are never edited mid-run)
        - Allow ORM/attribute objects (from_attributes)

    Strings are NOT stripped: SKUs are matched by exact string equality.
    """
    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
    )
