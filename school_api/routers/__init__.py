"""
FastAPI routers.

Every collection shares the same generic router (``collections.build_router``);
operational endpoints (health) live in ``health``.
"""
