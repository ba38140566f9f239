"""
Database connection utilities for the hosted PostgreSQL (Supabase) store
"""

import os
import psycopg2
from psycopg2.extras import RealDictCursor, execute_batch
from pydantic import ValidationError
from typing import Optional, Dict, Any, List
from contextlib import contextmanager

from utils.errors import PersistenceError


class DatabaseManager:
    """
    Runs queries against PostgreSQL.

    Each operation opens its own connection so the manager can be shared
    by request threads; psycopg2 connections must not be.
    """

    def __init__(self, connection_string: Optional[str] = None):
        """
        Initialize database manager.

        Args:
            connection_string: PostgreSQL connection URL
        """
        self.connection_string = connection_string or os.getenv("SUPABASE_DATABASE_URL") or os.getenv("DATABASE_URL")
        if not self.connection_string:
            raise ValueError("Database connection string not provided")

    def _connect(self):
        """Open a new connection"""
        try:
            return psycopg2.connect(self.connection_string)
        except psycopg2.Error as e:
            print(f"❌ Failed to connect to PostgreSQL: {str(e)}")
            raise PersistenceError(f"Could not connect to database: {e}") from e

    @contextmanager
    def get_cursor(self, cursor_factory=None):
        """
        Context manager for a cursor inside a single transaction.

        Commits when the block exits cleanly, rolls back otherwise.
        psycopg2 errors are re-raised as PersistenceError.

        Args:
            cursor_factory: Cursor factory (e.g., RealDictCursor)
        """
        conn = self._connect()
        try:
            with conn.cursor(cursor_factory=cursor_factory) as cursor:
                yield cursor
            conn.commit()
        except psycopg2.Error as e:
            conn.rollback()
            print(f"❌ Database error: {str(e)}")
            raise PersistenceError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def execute_query(self, query: str, params: tuple = None, fetch_one: bool = False) -> Any:
        """
        Execute a SELECT query and return results

        Args:
            query: SQL query string
            params: Query parameters
            fetch_one: Return a single row (or None) instead of a list

        Returns:
            One row dict, or a list of row dicts
        """
        with self.get_cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(query, params)
            if fetch_one:
                result = cur.fetchone()
                return dict(result) if result else None
            return [dict(row) for row in cur.fetchall()]

    def execute_batch(self, query: str, params_list: List[tuple]) -> int:
        """
        Execute one statement for every parameter tuple in a single transaction

        Args:
            query: SQL query string
            params_list: List of parameter tuples

        Returns:
            Number of parameter tuples written
        """
        if not params_list:
            return 0
        with self.get_cursor() as cur:
            execute_batch(cur, query, params_list, page_size=100)
        return len(params_list)


# Shared by every request thread; connections are per operation
_db_manager: Optional[DatabaseManager] = None


def get_db_manager(connection_string: Optional[str] = None) -> DatabaseManager:
    """
    Get or create database manager instance

    Args:
        connection_string: Optional connection string

    Returns:
        DatabaseManager instance
    """
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(connection_string)
    return _db_manager


def rows_as(model, rows: List[Dict[str, Any]]) -> list:
    """
    Validate raw row dicts into pydantic models

    Raises:
        PersistenceError: a row does not fit the model
    """
    try:
        return [model.model_validate(row) for row in rows]
    except ValidationError as e:
        print(f"❌ Malformed {model.__name__} row: {str(e)}")
        raise PersistenceError(f"Malformed {model.__name__} row: {e}") from e
