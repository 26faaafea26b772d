"""Database layer for cashpanel application."""

from cashpanel.database.base import Database
from cashpanel.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
