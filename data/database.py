"""
Database Module for Post Remixer Application

This module handles all database connections and operations for the Post Remixer
application. It provides the production implementation of the PostStore
capability on SQL Server: inserting, listing and deleting saved posts.
"""

import pyodbc
import pandas as pd
from typing import Optional, List, Dict, Any

from config import settings
from data import schema
from utils.exceptions import DatabaseError, QueryError
from utils.exceptions import ConnectionError as DatabaseConnectionError
from utils.logger import get_logger

logger = get_logger(__name__)


def _query_error(action: str, error: Exception) -> QueryError:
    """Build a QueryError carrying the diagnostic fields pyodbc provides."""
    sqlstate = None
    details = str(error)
    if isinstance(error, pyodbc.Error) and len(error.args) >= 2:
        sqlstate, details = error.args[0], error.args[1]
    logger.error(f"Error {action}: sqlstate={sqlstate} details={details}")
    return QueryError(f"Error {action}: {details}", sqlstate=sqlstate, details=details)


class DatabaseConnection:
    """Database connection manager and SQL Server saved posts store."""

    def __init__(self, connection_string: Optional[str] = None):
        """Initialize the database connection."""
        self.conn = None
        self.connection_string = connection_string
        pyodbc.pooling = False

    def connect(self) -> bool:
        """
        Establish a connection to the database.

        Returns:
            bool: True if connection was successful, False otherwise.
        """
        try:
            self.conn = pyodbc.connect(self.connection_string or settings.DB_CONNECTION_STRING)
            self.conn.setdecoding(pyodbc.SQL_CHAR, encoding='utf-8')
            logger.info("Successfully connected to database")
            return True
        except Exception as e:
            logger.error(f"Failed to connect to database: {e}")
            self.conn = None
            return False

    def close(self) -> None:
        """Close the database connection."""
        try:
            if self.conn:
                self.conn.close()
                logger.info("Database connection closed")
        except Exception as e:
            logger.error(f"Error closing database connection: {e}")
        finally:
            self.conn = None

    def _require_connection(self):
        if not self.conn and not self.connect():
            raise DatabaseConnectionError("Could not connect to the saved posts database")
        return self.conn

    def _rollback(self) -> None:
        try:
            self.conn.rollback()
        except Exception as e:
            logger.debug(f"Rollback failed: {e}")

    def execute_query(self, query: str, params: Optional[tuple] = None) -> List[Dict]:
        """
        Execute a SQL query and return the results.

        Args:
            query: The SQL query to execute.
            params: Query parameters (optional).

        Returns:
            List[Dict]: Query results as a list of dictionaries; empty for statements without results.

        Raises:
            ConnectionError: If no connection could be established.
            QueryError: If the query fails.
        """
        conn = self._require_connection()

        try:
            cursor = conn.cursor()
            if params:
                cursor.execute(query, params)
            else:
                cursor.execute(query)

            # Check if this is a SELECT query with results
            if cursor.description:
                columns = [column[0] for column in cursor.description]
                results = [dict(zip(columns, row)) for row in cursor.fetchall()]
                conn.commit()
                return results
            else:
                conn.commit()
                return []

        except Exception as e:
            self._rollback()
            raise _query_error("executing query", e)

    def ensure_schema(self) -> int:
        """
        Create the saved posts tables if needed and record the schema version.

        Returns:
            int: The schema version now in effect.

        Raises:
            DatabaseError: If the stored schema is newer than this application understands.
        """
        self.execute_query(schema.CREATE_SAVED_POSTS_TABLE)
        self.execute_query(schema.CREATE_SCHEMA_VERSION_TABLE)

        rows = self.execute_query(schema.SELECT_SCHEMA_VERSION)
        current = rows[0].get("Version") if rows else None

        if current is None or current < schema.SCHEMA_VERSION:
            self.execute_query(schema.INSERT_SCHEMA_VERSION, (schema.SCHEMA_VERSION,))
            logger.info(f"Saved posts schema upgraded from {current} to {schema.SCHEMA_VERSION}")
            return schema.SCHEMA_VERSION

        if current > schema.SCHEMA_VERSION:
            raise DatabaseError(
                f"Saved posts schema version {current} is newer than supported version {schema.SCHEMA_VERSION}"
            )

        return current

    def test_connection(self) -> bool:
        """
        Check once that the saved posts table is reachable.

        Returns:
            bool: True if the check query succeeded, False otherwise.
        """
        try:
            self.execute_query(schema.CONNECTION_TEST_QUERY)
            logger.info("Saved posts store connection successful")
            return True
        except DatabaseError as e:
            logger.error(f"Saved posts store connection test failed: {e}")
            return False

    def insert_saved_post(self, content: str) -> Dict[str, Any]:
        """
        Insert a saved post and return the stored row.

        Args:
            content: The post content to store.

        Returns:
            Dict: The inserted row with its assigned ID and timestamp.
        """
        conn = self._require_connection()

        try:
            cursor = conn.cursor()
            cursor.execute(schema.INSERT_SAVED_POST, (content,))
            row = cursor.fetchone()
            if row is None:
                raise QueryError("Insert returned no row", details="OUTPUT clause produced no row")
            columns = [column[0] for column in cursor.description]
            conn.commit()
            record = dict(zip(columns, row))
            logger.info(f"Saved post stored with Saved_Post_ID: {record.get(schema.COLUMN_ID)}")
            return record

        except QueryError:
            self._rollback()
            raise
        except Exception as e:
            self._rollback()
            raise _query_error("inserting saved post", e)

    def list_saved_posts(self) -> List[Dict[str, Any]]:
        """
        Retrieve all saved posts, newest first.

        Returns:
            List[Dict]: Saved post rows.
        """
        conn = self._require_connection()

        try:
            frame = pd.read_sql(schema.SELECT_SAVED_POSTS, conn)
        except Exception as e:
            raise _query_error("listing saved posts", e)

        logger.info(f"Retrieved {len(frame)} saved posts")
        return frame.to_dict("records")

    def delete_saved_post(self, saved_post_id: int) -> bool:
        """
        Delete a saved post by ID.

        Args:
            saved_post_id: The ID of the saved post.

        Returns:
            bool: True if a row was deleted, False if none matched.
        """
        conn = self._require_connection()

        try:
            cursor = conn.cursor()
            cursor.execute(schema.DELETE_SAVED_POST, (saved_post_id,))
            deleted = cursor.rowcount
            conn.commit()
        except Exception as e:
            self._rollback()
            raise _query_error("deleting saved post", e)

        if deleted:
            logger.info(f"Deleted saved post - Saved_Post_ID: {saved_post_id}")
        return bool(deleted)
