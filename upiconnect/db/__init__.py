"""
Database module - record store connection and schema.
"""
from upiconnect.db.postgres import engine, get_db_session, execute_raw_sql
from upiconnect.db.schema import metadata, init_schema

__all__ = [
    "engine",
    "get_db_session",
    "execute_raw_sql",
    "metadata",
    "init_schema",
]
