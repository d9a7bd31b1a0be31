"""Required/allowed field checks applied before every insert or replace."""
from __future__ import annotations

from typing import Any

from school_api.core.errors import ValidationError
from school_api.domain.resources import INVALID_BODY_MESSAGE, INVALID_FIELD_MESSAGE, ResourceDefinition


def validate_payload(payload: Any, resource: ResourceDefinition) -> dict:
    """
    Valida o corpo enviado contra os campos do recurso.

    Ordem: campos obrigatorios (na ordem da definicao) e depois campos
    desconhecidos (na ordem do payload). Apenas a primeira violacao e
    reportada. Nao ha checagem de tipos.
    """
    if not isinstance(payload, dict):
        raise ValidationError(INVALID_BODY_MESSAGE)
    for name in resource.required_fields:
        if not payload.get(name):
            raise ValidationError(resource.missing_message(name), field=name)
    allowed = resource.allowed_fields
    for key in payload:
        if key not in allowed:
            raise ValidationError(INVALID_FIELD_MESSAGE.format(field=key), field=key)
    return payload
