"""In-memory saved posts store for tests and local runs."""

import itertools
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from data import schema
from utils.exceptions import QueryError


class InMemoryPostStore:
    """Process-local implementation of the PostStore protocol."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._rows: Dict[int, Dict[str, Any]] = {}
        self._ids = itertools.count(1)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def insert_saved_post(self, content: str) -> Dict[str, Any]:
        if not content:
            # mirrors the CHECK constraint on the real table
            raise QueryError("Content must not be empty", sqlstate="23000",
                             details="CK_Saved_Posts_Content")
        saved_post_id = next(self._ids)
        row = {
            schema.COLUMN_ID: saved_post_id,
            schema.COLUMN_CONTENT: content,
            schema.COLUMN_CREATED_AT: self._clock(),
        }
        self._rows[saved_post_id] = row
        return dict(row)

    def list_saved_posts(self) -> List[Dict[str, Any]]:
        rows = sorted(
            self._rows.values(),
            key=lambda r: (r[schema.COLUMN_CREATED_AT], r[schema.COLUMN_ID]),
            reverse=True,
        )
        return [dict(r) for r in rows]

    def delete_saved_post(self, saved_post_id: int) -> bool:
        return self._rows.pop(saved_post_id, None) is not None

    def test_connection(self) -> bool:
        return True

    def close(self) -> None:
        pass
