"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so services/DAOs avoid SQL strings.
Every function takes an open connection; transactions belong to the caller.
"""
from __future__ import annotations
