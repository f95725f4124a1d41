"""
Base model for message and point entities.

Provides the shared pydantic configuration and serialization helpers.
"""

from pydantic import BaseModel, ConfigDict


class DataModel(BaseModel):
    """
    Base model for all prep entities.

    Provides:
    - Population by field name or alias
    - Arbitrary payload value types
    - JSON serialization helpers
    """

    model_config = ConfigDict(
        # Payload values are opaque decoder output
        arbitrary_types_allowed=True,
        # Use enum values in serialization
        use_enum_values=True,
        # Populate by field name or alias
        populate_by_name=True,
    )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Convert to JSON string."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
