"""Domain rules for the school collections (resource definitions, validation)."""
