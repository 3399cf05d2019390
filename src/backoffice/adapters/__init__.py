"""Adapters - Infrastructure implementations of core interfaces.

Adapters are organized by type:
- db/: asyncpg application database
- auth/: credential lookups for the auth service
- rbac/: roles (with their permission sets) and permissions
- entities/: single-table repositories (users, suppliers, tags, organizations)
"""
