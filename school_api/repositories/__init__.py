"""
Persistence adapters.

These modules encapsulate how data is stored/retrieved (today one JSON file
per collection). Services depend on the store interface rather than touching
the files directly.
"""

from .json_storage import JsonCollectionStore

__all__ = ["JsonCollectionStore"]
