"""
Database Connection Module
==========================

Handles PostgreSQL connections for the week calendar loader.
"""

import logging
import os

import psycopg2
from psycopg2.extras import RealDictCursor
from typing import List, Dict, Any, Iterable, Optional, Sequence


logger = logging.getLogger(__name__)


class DatabaseConnection:
    """PostgreSQL database connection manager."""

    def __init__(self):
        """Initialise connection parameters from environment variables."""
        self.config = {
            'host': os.environ.get('DB_HOST', 'localhost'),
            'port': int(os.environ.get('DB_PORT', '5432')),
            'database': os.environ.get('DB_NAME', 'week_calendar'),
            'user': os.environ.get('DB_USER', 'weekcal'),
            'password': os.environ.get('DB_PASSWORD', 'weekcal'),
        }
        self.connection = None

    def connect(self) -> bool:
        """Establish database connection."""
        try:
            self.connection = psycopg2.connect(**self.config)
            return True
        except psycopg2.Error as e:
            logger.error("Error connecting to database %s@%s: %s",
                         self.config['database'], self.config['host'], e)
            return False

    def disconnect(self) -> None:
        """Close database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def _require_connection(self):
        if not self.connection and not self.connect():
            raise psycopg2.OperationalError("Database connection failed")
        return self.connection

    def query_params(self, sql: str, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """
        Execute a SELECT query and return results as a list of dictionaries.

        Args:
            sql: SQL SELECT statement, with %s placeholders when params is given
            params: Parameter sequence matching the placeholders

        Returns:
            List of dictionaries (one per row)
        """
        connection = self._require_connection()
        with connection.cursor(cursor_factory=RealDictCursor) as cursor:
            cursor.execute(sql, params)
            return [dict(row) for row in cursor.fetchall()]

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> int:
        """Execute one statement (no commit). Returns the affected row count."""
        connection = self._require_connection()
        with connection.cursor() as cursor:
            cursor.execute(sql, params)
            return cursor.rowcount

    def execute_many(self, sql: str, rows: Iterable[Sequence[Any]]) -> None:
        """Execute one statement per parameter row (no commit)."""
        connection = self._require_connection()
        with connection.cursor() as cursor:
            cursor.executemany(sql, list(rows))

    def commit(self) -> None:
        self._require_connection().commit()

    def rollback(self) -> None:
        if self.connection:
            self.connection.rollback()
