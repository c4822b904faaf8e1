"""
Data Layer Protocol Definitions

This module defines typing.Protocol interfaces for data layer operations.
These protocols enable dependency injection for storage operations,
making services testable without real database connections.

Protocols defined:
- PostStore: Interface for inserting, listing and deleting saved posts
"""

from typing import Protocol, List, Dict, Any


class PostStore(Protocol):
    """Protocol defining the saved posts storage capability.

    Implementations should provide exactly three operations against one
    logical table with the columns described in data.schema:
    - Inserting a record and returning it with its assigned id and timestamp
    - Listing all records ordered by creation time, newest first
    - Deleting a record by id

    Implementations raise utils.exceptions.DatabaseError subclasses on failure.
    """

    def insert_saved_post(self, content: str) -> Dict[str, Any]:
        """Insert a saved post record.

        Args:
            content: The post content, segments joined by the delimiter.

        Returns:
            The inserted row keyed by column name.
        """
        ...

    def list_saved_posts(self) -> List[Dict[str, Any]]:
        """Retrieve all saved posts, newest first.

        Returns:
            List of rows keyed by column name.
        """
        ...

    def delete_saved_post(self, saved_post_id: int) -> bool:
        """Delete a saved post by its ID.

        Args:
            saved_post_id: The ID of the post to delete.

        Returns:
            True if a record was deleted, False if no record matched.
        """
        ...
