"""Create/read/replace/delete use cases shared by every collection."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from school_api.core.errors import RecordNotFoundError, UnknownLookupError
from school_api.core.utils import new_id
from school_api.domain.resources import ID_FIELD, ResourceDefinition
from school_api.domain.validation import validate_payload
from school_api.repositories.json_storage import JsonCollectionStore

logger = logging.getLogger(__name__)

_MAX_ID_ATTEMPTS = 5


class CollectionService:
    """Validates payloads and applies them to one resource's store."""

    def __init__(
        self,
        resource: ResourceDefinition,
        store: JsonCollectionStore,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self.resource = resource
        self.store = store
        self._id_factory = id_factory

    @classmethod
    def from_data_dir(cls, resource: ResourceDefinition, data_dir: Path) -> "CollectionService":
        return cls(resource, JsonCollectionStore(Path(data_dir) / resource.filename, name=resource.name))

    @property
    def name(self) -> str:
        return self.resource.name

    # -------------------------- reads --------------------------
    def list(self) -> list[dict]:
        return self.store.list()

    def count(self) -> int:
        return self.store.count()

    def get(self, record_id: str) -> dict:
        record = self.store.find_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(self.resource.not_found)
        return record

    def find(self, segment: str, value: str) -> list[dict]:
        lookup = self.resource.lookup(segment)
        if lookup is None:
            raise UnknownLookupError(f"Consulta por '{segment}' não suportada")
        matches = self.store.find_by_field(lookup.field, value, case_insensitive=lookup.case_insensitive)
        if not matches:
            raise RecordNotFoundError(lookup.not_found)
        return matches

    # -------------------------- writes -------------------------
    def create(self, payload: dict) -> dict:
        validate_payload(payload, self.resource)
        body = {k: v for k, v in payload.items() if k != ID_FIELD}
        record = self._prepare({ID_FIELD: self._generate_id(), **body})
        stored = self.store.insert(record)
        logger.info("%s: registro %s criado", self.name, stored[ID_FIELD])
        return stored

    def replace(self, record_id: str, payload: dict) -> dict:
        # existencia conferida sob o lock do store, antes da validacao
        def _build(current: dict) -> dict:
            body = {**payload, ID_FIELD: record_id} if isinstance(payload, dict) else payload
            validate_payload(body, self.resource)
            return self._prepare({ID_FIELD: record_id, **{k: v for k, v in body.items() if k != ID_FIELD}})

        stored = self.store.update(record_id, _build)
        if stored is None:
            raise RecordNotFoundError(self.resource.not_found)
        logger.info("%s: registro %s substituido", self.name, record_id)
        return stored

    def remove(self, record_id: str) -> dict:
        removed = self.store.remove(record_id)
        if removed is None:
            raise RecordNotFoundError(self.resource.not_found)
        logger.info("%s: registro %s removido", self.name, record_id)
        return removed

    # -------------------------- helpers ------------------------
    def _generate_id(self) -> str:
        existing = self.store.ids()
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate not in existing:
                return candidate
        raise RuntimeError(f"Nao foi possivel gerar um id unico para '{self.name}'")

    def _prepare(self, record: dict) -> dict:
        if self.resource.prepare is None:
            return record
        return self.resource.prepare(record)
