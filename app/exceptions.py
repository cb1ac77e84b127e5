"""
Words API — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions raised by the service layer.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) turn them into
       JSON responses with a generic body.

Exception Hierarchy:
    WordsAPIError (base)
    └── StorageError  → 500 Internal Server Error

Storage failures are not recovered: there are no retries and no
per-cause status codes. A refused connection, a NOT NULL violation from a
missing field and a bad statement all end the request with the same 500.
"""

from typing import Any, Dict, Optional


class WordsAPIError(Exception):
    """
    Base exception for all Words API application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class StorageError(WordsAPIError):
    """
    Raised when a database statement or connection fails.

    When:    Connection refused (including misconfiguration discovered on
             first use), constraint violation, query/parameter mismatch.
    HTTP:    500 Internal Server Error

    The original SQLAlchemy exception is chained as __cause__ and its type
    name is kept in context; neither reaches the client.
    """

    def __init__(
        self,
        message: str = "A database error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
