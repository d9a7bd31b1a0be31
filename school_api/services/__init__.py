"""
High-level use cases for the school records API.

Each service orchestrates the validator, the identifier generator and a
collection store. Routers (FastAPI endpoints) call these services instead of
manipulating the JSON files directly.
"""
