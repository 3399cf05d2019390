"""backoffice - relational back-office service for users, roles and catalog data."""

__version__ = "1.0.0"
