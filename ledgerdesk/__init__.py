"""Double-entry bookkeeping backend: SQLite storage, schema migrations and a token-protected company API."""

__version__ = "0.1.0"