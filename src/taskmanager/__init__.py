"""Task management API with JWT authentication and user-scoped task CRUD."""

__version__ = "0.1.0"
