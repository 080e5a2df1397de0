"""Steam IDs, social caches, authenticator codes and trading helpers."""

__version__ = "0.1.0"