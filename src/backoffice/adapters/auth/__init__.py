"""Auth adapters."""

from backoffice.adapters.auth.postgres import PostgresAuthRepository

__all__ = ["PostgresAuthRepository"]
