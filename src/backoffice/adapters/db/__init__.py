"""Application database adapters.

Contents:
- app_db: asyncpg pool, scoped connections, transactions and page execution
"""

from .app_db import AppDatabase

__all__ = ["AppDatabase"]
