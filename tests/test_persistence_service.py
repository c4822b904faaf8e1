"""
Tests for the Persistence Gateway and In-Memory Store

Tests cover the save/list/delete round trip, validation before any store
call, ordering, and the conversion of store failures to DatabaseError.
"""

import pytest
from unittest.mock import MagicMock
from datetime import datetime, timezone
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data.memory_store import InMemoryPostStore
from data.models import SavedPost
from services.persistence_service import PersistenceGateway
from utils.exceptions import DatabaseError, QueryError, RecordNotFoundError, ValidationError


class TestInMemoryPostStore:
    """Tests for the in-memory PostStore implementation."""

    def test_insert_assigns_id_and_timestamp(self, memory_store):
        row = memory_store.insert_saved_post("A|B")

        assert row["Saved_Post_ID"] == 1
        assert row["Content"] == "A|B"
        assert isinstance(row["Created_At"], datetime)

    def test_ids_are_unique(self, memory_store):
        ids = {memory_store.insert_saved_post(f"post {n}")["Saved_Post_ID"] for n in range(5)}
        assert len(ids) == 5

    def test_list_is_newest_first(self, memory_store):
        memory_store.insert_saved_post("first")
        memory_store.insert_saved_post("second")

        contents = [row["Content"] for row in memory_store.list_saved_posts()]
        assert contents == ["second", "first"]

    def test_empty_content_violates_constraint(self, memory_store):
        with pytest.raises(QueryError):
            memory_store.insert_saved_post("")

    def test_delete(self, memory_store):
        row = memory_store.insert_saved_post("x")

        assert memory_store.delete_saved_post(row["Saved_Post_ID"]) is True
        assert memory_store.delete_saved_post(row["Saved_Post_ID"]) is False


class TestSavePost:
    """Tests for PersistenceGateway.save_post."""

    def test_save_then_list_round_trip(self, gateway):
        earlier = gateway.save_post("earlier")
        saved = gateway.save_post("abc")

        posts = gateway.list_posts()

        assert saved.id
        assert saved.content == "abc"
        assert posts[0] == saved
        assert posts.index(saved) < posts.index(earlier)

    @pytest.mark.parametrize("content", ["", "   ", None])
    def test_empty_content_rejected_before_store_call(self, content):
        store = MagicMock(spec=InMemoryPostStore)
        gateway = PersistenceGateway(store)

        with pytest.raises(ValidationError):
            gateway.save_post(content)

        store.insert_saved_post.assert_not_called()

    def test_validation_error_is_not_a_store_error(self, gateway):
        with pytest.raises(ValidationError) as exc_info:
            gateway.save_post("")

        assert not isinstance(exc_info.value, DatabaseError)

    def test_store_error_propagates(self):
        store = MagicMock(spec=InMemoryPostStore)
        store.insert_saved_post.side_effect = QueryError("insert failed", sqlstate="08S01")

        with pytest.raises(QueryError) as exc_info:
            PersistenceGateway(store).save_post("abc")

        assert exc_info.value.sqlstate == "08S01"

    def test_unexpected_store_exception_becomes_query_error(self):
        store = MagicMock(spec=InMemoryPostStore)
        store.insert_saved_post.side_effect = RuntimeError("socket closed")

        with pytest.raises(QueryError):
            PersistenceGateway(store).save_post("abc")


class TestListPosts:
    """Tests for PersistenceGateway.list_posts."""

    def test_empty_store(self, gateway):
        assert gateway.list_posts() == []

    def test_returns_saved_post_objects(self, gateway):
        gateway.save_post("One | Two")

        posts = gateway.list_posts()

        assert isinstance(posts[0], SavedPost)
        assert posts[0].segments == ["One", "Two"]

    def test_orders_rows_even_if_store_does_not(self):
        store = MagicMock(spec=InMemoryPostStore)
        store.list_saved_posts.return_value = [
            {"Saved_Post_ID": 1, "Content": "old", "Created_At": datetime(2024, 1, 1, tzinfo=timezone.utc)},
            {"Saved_Post_ID": 2, "Content": "new", "Created_At": datetime(2024, 1, 2, tzinfo=timezone.utc)},
        ]

        posts = PersistenceGateway(store).list_posts()

        assert [p.id for p in posts] == [2, 1]

    def test_list_failure_raises_store_error(self):
        store = MagicMock(spec=InMemoryPostStore)
        store.list_saved_posts.side_effect = RuntimeError("boom")

        with pytest.raises(DatabaseError):
            PersistenceGateway(store).list_posts()


class TestDeletePost:
    """Tests for PersistenceGateway.delete_post."""

    def test_delete_removes_only_target(self, gateway):
        first = gateway.save_post("first")
        second = gateway.save_post("second")
        third = gateway.save_post("third")

        gateway.delete_post(second.id)

        remaining = [p.id for p in gateway.list_posts()]
        assert remaining == [third.id, first.id]

    def test_delete_missing_id(self, gateway):
        with pytest.raises(RecordNotFoundError):
            gateway.delete_post(12345)

    def test_delete_store_failure(self):
        store = MagicMock(spec=InMemoryPostStore)
        store.delete_saved_post.side_effect = QueryError("locked")

        with pytest.raises(QueryError):
            PersistenceGateway(store).delete_post(1)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
