"""DIY projects tracker: console CRUD over a SQLite store."""

__version__ = "0.1.0"
