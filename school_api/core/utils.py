"""
Utility helpers shared across routers/services.
"""

import uuid


def new_id() -> str:
    """
    Gera um identificador opaco e unico (uuid4) para novos registros.
    """
    return str(uuid.uuid4())


def normalize_text(value: object) -> str | None:
    """Chave de comparacao case-insensitive; None para valores que nao sao texto."""
    if not isinstance(value, str):
        return None
    return value.casefold()
