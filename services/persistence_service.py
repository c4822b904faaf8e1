"""
Persistence Service Module

This module is a stateless facade over a PostStore. It validates content
before any store call, converts store rows into SavedPost objects and makes
sure every store failure surfaces as a DatabaseError subclass.
"""

from typing import List

from data.models import SavedPost
from data.protocols import PostStore
from utils.exceptions import DatabaseError, QueryError, RecordNotFoundError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


class PersistenceGateway:
    """Create, list and delete saved posts in a remote store."""

    def __init__(self, store: PostStore):
        self.store = store

    def list_posts(self) -> List[SavedPost]:
        """
        Fetch all saved posts, newest first.

        Returns:
            List[SavedPost]: Every saved post in the store.

        Raises:
            DatabaseError: If the store query fails.
        """
        try:
            rows = self.store.list_saved_posts()
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(f"Unexpected store error listing saved posts: {e}", exc_info=True)
            raise QueryError(f"Error listing saved posts: {e}", details=str(e)) from e

        posts = [SavedPost.from_row(row) for row in rows]
        # Order is part of the contract; stores are not trusted to provide it.
        posts.sort(key=lambda p: (p.created_at, p.id), reverse=True)
        return posts

    def save_post(self, content: str) -> SavedPost:
        """
        Persist one post.

        Args:
            content: The post content, segments joined by the delimiter.

        Returns:
            SavedPost: The stored record with its assigned ID and timestamp.

        Raises:
            ValidationError: If content is empty; raised before any store call.
            DatabaseError: If the insert fails.
        """
        if not content or not content.strip():
            raise ValidationError("Cannot save an empty post")

        try:
            row = self.store.insert_saved_post(content)
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(f"Unexpected store error saving post: {e}", exc_info=True)
            raise QueryError(f"Error saving post: {e}", details=str(e)) from e

        saved = SavedPost.from_row(row)
        logger.info(f"Saved post {saved.id}")
        return saved

    def delete_post(self, saved_post_id: int) -> None:
        """
        Delete one saved post.

        Args:
            saved_post_id: The ID of the post to delete.

        Raises:
            RecordNotFoundError: If no post has this ID.
            DatabaseError: If the delete fails.
        """
        try:
            deleted = self.store.delete_saved_post(saved_post_id)
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(f"Unexpected store error deleting post {saved_post_id}: {e}", exc_info=True)
            raise QueryError(f"Error deleting post: {e}", details=str(e)) from e

        if not deleted:
            raise RecordNotFoundError(f"No saved post with ID {saved_post_id}")

        logger.info(f"Deleted saved post {saved_post_id}")
