"""
sql-shuffle

Replays every order-preserving interleaving of several per-client SQL scripts
against a database, one interleaving at a time.
"""

__version__ = "0.1.0"
