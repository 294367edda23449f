# Repositories package init
"""
Postboard API: Repositories
============================

What:  Storage layer behind the services. Only an in-memory implementation
       exists; see store.py for the EntityStore contract.
"""

from postboard.repositories.store import EntityStore, InMemoryStore

__all__ = ["EntityStore", "InMemoryStore"]
