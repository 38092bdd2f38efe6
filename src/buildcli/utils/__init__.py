"""Shared utilities — styling helpers and cross-cutting concerns.

Rules
-----
* No business logic.
* No filesystem or network I/O.
* Importable by any layer.
"""
