"""Shared utilities — importable by any layer.

Rules
-----
* No business logic.
* No I/O beyond importing modules.
"""
