"""
JSON-file persistence adapter.

Each ``JsonCollectionStore`` owns one JSON array on disk and the in-memory copy
of it. Reads and mutations run under a per-file lock and reload from disk
first; a mutation then writes the whole array back atomically. A failed write
rolls the memory back.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Callable, TypeVar

from school_api.core.errors import CollectionLoadError, PersistenceError
from school_api.core.utils import normalize_text
from school_api.domain.resources import ID_FIELD

logger = logging.getLogger(__name__)

T = TypeVar("T")

_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _locks_guard:
        lock = _locks.get(path)
        if lock is None:
            lock = _locks[path] = threading.Lock()
        return lock


def read_collection(path: Path) -> list[dict]:
    """Le o arquivo; ausente = colecao vazia, corrompido = CollectionLoadError."""
    if not path.exists():
        return []
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CollectionLoadError(f"Erro ao carregar '{path.name}': {exc}") from exc
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise CollectionLoadError(f"Erro ao carregar '{path.name}': esperado um array JSON de objetos")
    return data


def write_collection(path: Path, records: list[dict]) -> None:
    """Grava o array inteiro num arquivo temporario e substitui o destino."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
                f.write("\n")
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except (OSError, TypeError, ValueError) as exc:
        raise PersistenceError(f"Erro ao salvar '{path.name}': {exc}") from exc


class JsonCollectionStore:
    """Ordered list of records mirrored to a single JSON file."""

    def __init__(self, path: Path | str, name: str | None = None) -> None:
        self.path = Path(path).resolve()
        self.name = name or self.path.stem
        self._lock = _lock_for(self.path)
        with self._lock:
            self._records: list[dict] = read_collection(self.path)
        logger.info("Colecao '%s' carregada de %s (%d registros)", self.name, self.path, len(self._records))

    # -------------------------- reads --------------------------
    # Toda leitura rele o arquivo sob o lock, como as escritas fazem.
    def reload(self) -> list[dict]:
        with self._lock:
            return copy.deepcopy(self._reload_locked())

    def list(self) -> list[dict]:
        return self.reload()

    def count(self) -> int:
        with self._lock:
            return len(self._reload_locked())

    def find_by_id(self, record_id: str) -> dict | None:
        with self._lock:
            records = self._reload_locked()
            index = self._index_of(records, record_id)
            return copy.deepcopy(records[index]) if index is not None else None

    def find_by_field(self, field: str, value: str, case_insensitive: bool = True) -> list[dict]:
        with self._lock:
            records = self._reload_locked()
            if case_insensitive:
                wanted = normalize_text(value)
                matches = [r for r in records if wanted is not None and normalize_text(r.get(field)) == wanted]
            else:
                matches = [r for r in records if r.get(field) == value]
            return copy.deepcopy(matches)

    def ids(self) -> set[str]:
        with self._lock:
            return {r.get(ID_FIELD) for r in self._reload_locked()}

    def _reload_locked(self) -> list[dict]:
        self._records = read_collection(self.path)
        return self._records

    # -------------------------- writes -------------------------
    def mutate(self, fn: Callable[[list[dict]], T]) -> T:
        """
        Executa ``fn`` sobre a lista recarregada do disco e persiste o resultado.

        ``fn`` recebe a lista viva e pode altera-la; se retornar None nada e
        gravado. Falha de escrita restaura o estado anterior em memoria.
        """
        with self._lock:
            records = read_collection(self.path)
            result = fn(records)
            if result is None:
                self._records = records
                return result
            previous = self._records
            self._records = records
            try:
                write_collection(self.path, records)
            except PersistenceError:
                self._records = previous
                logger.exception("Falha ao persistir colecao '%s'", self.name)
                raise
            return result

    def insert(self, record: dict) -> dict:
        stored = copy.deepcopy(record)

        def _append(records: list[dict]) -> dict:
            records.append(stored)
            return copy.deepcopy(stored)

        return self.mutate(_append)

    def replace(self, record_id: str, record: dict) -> dict | None:
        return self.update(record_id, lambda current: record)

    def update(self, record_id: str, build: Callable[[dict], dict]) -> dict | None:
        """
        Substitui o registro ``record_id`` pelo retorno de ``build(atual)``.

        A busca e o ``build`` rodam sob o lock, sobre o arquivo recarregado;
        None quando o id nao existe. Excecoes de ``build`` abortam sem gravar.
        """

        def _overwrite(records: list[dict]) -> dict | None:
            index = self._index_of(records, record_id)
            if index is None:
                return None
            stored = copy.deepcopy(build(copy.deepcopy(records[index])))
            records[index] = stored
            return copy.deepcopy(stored)

        return self.mutate(_overwrite)

    def remove(self, record_id: str) -> dict | None:
        def _splice(records: list[dict]) -> dict | None:
            index = self._index_of(records, record_id)
            if index is None:
                return None
            return records.pop(index)

        return self.mutate(_splice)

    @staticmethod
    def _index_of(records: list[dict], record_id: str) -> int | None:
        for index, record in enumerate(records):
            if record.get(ID_FIELD) == record_id:
                return index
        return None
