"""Database layer for fundplan application."""

from fundplan.database.base import Database
from fundplan.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
