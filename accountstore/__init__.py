"""
AccountStore
============

Local persistence layer for ledger account state: accounts and their
content-addressed code, storage and vault components, kept in SQLite.
"""

from accountstore.units.version import get_version, VERSION


__version__ = get_version(VERSION)

__all__ = ["VERSION", "__version__"]
