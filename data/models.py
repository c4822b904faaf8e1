"""
Data Models for Post Remixer Application

This module contains data classes used by the persistence layer.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List

from config import settings
from data import schema


@dataclass
class SavedPost:
    """A post record persisted in the saved posts store."""
    id: int                            # Store-assigned identifier
    content: str                       # Segments joined by the delimiter
    created_at: datetime               # Assigned by the store at insert

    @property
    def segments(self) -> List[str]:
        """Split the stored content back into its segments."""
        return [part.strip() for part in self.content.split(settings.SEGMENT_DELIMITER)]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "SavedPost":
        """Build a SavedPost from a store row keyed by column name."""
        created_at = row[schema.COLUMN_CREATED_AT]
        # pandas hands back Timestamps
        if hasattr(created_at, "to_pydatetime"):
            created_at = created_at.to_pydatetime()
        return cls(
            id=int(row[schema.COLUMN_ID]),
            content=row[schema.COLUMN_CONTENT],
            created_at=created_at,
        )
