"""School records API: JSON-file backed collections served with FastAPI."""
