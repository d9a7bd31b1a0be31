"""
Tests for the JSON collection store against temporary files.
"""
from __future__ import annotations

import json
import sys
import threading
from pathlib import Path

import pytest

# Garante que o pacote school_api seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from school_api.core.errors import CollectionLoadError, PersistenceError  # noqa: E402
from school_api.repositories import json_storage  # noqa: E402
from school_api.repositories.json_storage import JsonCollectionStore  # noqa: E402


@pytest.fixture()
def store_path(tmp_path):
    return tmp_path / "students.json"


def _on_disk(path: Path) -> list[dict]:
    return json.loads(path.read_text(encoding="utf-8"))


def test_missing_file_is_an_empty_collection(store_path):
    store = JsonCollectionStore(store_path)
    assert store.list() == []
    assert not store_path.exists()


def test_malformed_file_raises_load_error(store_path):
    store_path.write_text("{nao e json", encoding="utf-8")
    with pytest.raises(CollectionLoadError):
        JsonCollectionStore(store_path)


def test_non_array_file_raises_load_error(store_path):
    store_path.write_text(json.dumps({"id": "1"}), encoding="utf-8")
    with pytest.raises(CollectionLoadError):
        JsonCollectionStore(store_path)


def test_insert_persists_pretty_printed_array(store_path):
    store = JsonCollectionStore(store_path)
    stored = store.insert({"id": "a1", "name": "Bingo Heeler", "special_needs": "Síndrome de Down"})
    assert stored["id"] == "a1"
    assert _on_disk(store_path) == [{"id": "a1", "name": "Bingo Heeler", "special_needs": "Síndrome de Down"}]
    text = store_path.read_text(encoding="utf-8")
    assert '\n  {\n    "id": "a1"' in text
    assert "Síndrome" in text


def test_find_by_id_and_field(store_path):
    store = JsonCollectionStore(store_path)
    store.insert({"id": "a1", "name": "Bingo Heeler", "date": "2023-08-15 16:00:00"})
    store.insert({"id": "a2", "name": "Bluey Heeler", "date": "2023-08-15 16:00:00"})
    assert store.find_by_id("a2")["name"] == "Bluey Heeler"
    assert store.find_by_id("zzz") is None
    assert [r["id"] for r in store.find_by_field("name", "BINGO heeler")] == ["a1"]
    assert store.find_by_field("name", "bingo", case_insensitive=True) == []
    assert len(store.find_by_field("date", "2023-08-15 16:00:00", case_insensitive=False)) == 2
    assert store.find_by_field("date", "2023-08-15", case_insensitive=False) == []


def test_returned_records_are_copies(store_path):
    store = JsonCollectionStore(store_path)
    store.insert({"id": "a1", "name": "Bingo"})
    snapshot = store.list()
    snapshot[0]["name"] = "alterado"
    assert store.find_by_id("a1")["name"] == "Bingo"


def test_replace_and_remove(store_path):
    store = JsonCollectionStore(store_path)
    store.insert({"id": "a1", "name": "Bingo"})
    store.insert({"id": "a2", "name": "Bluey"})

    assert store.replace("a1", {"id": "a1", "name": "Bingo Heeler"})["name"] == "Bingo Heeler"
    assert store.replace("nope", {"id": "nope"}) is None

    removed = store.remove("a1")
    assert removed == {"id": "a1", "name": "Bingo Heeler"}
    assert store.remove("a1") is None
    assert _on_disk(store_path) == [{"id": "a2", "name": "Bluey"}]


def test_mutation_reloads_external_changes(store_path):
    store = JsonCollectionStore(store_path)
    store.insert({"id": "a1", "name": "Bingo"})
    other = JsonCollectionStore(store_path)
    other.insert({"id": "a2", "name": "Bluey"})

    store.insert({"id": "a3", "name": "Muffin"})
    assert [r["id"] for r in _on_disk(store_path)] == ["a1", "a2", "a3"]
    assert [r["id"] for r in store.list()] == ["a1", "a2", "a3"]


def test_failed_write_rolls_back_memory(store_path, monkeypatch):
    store = JsonCollectionStore(store_path)
    store.insert({"id": "a1", "name": "Bingo"})

    def _boom(path, records):
        raise PersistenceError("Erro ao salvar")

    monkeypatch.setattr(json_storage, "write_collection", _boom)
    with pytest.raises(PersistenceError):
        store.insert({"id": "a2", "name": "Bluey"})
    with pytest.raises(PersistenceError):
        store.remove("a1")

    assert [r["id"] for r in store.list()] == ["a1"]
    assert [r["id"] for r in _on_disk(store_path)] == ["a1"]


def test_concurrent_inserts_do_not_lose_updates(store_path):
    stores = [JsonCollectionStore(store_path) for _ in range(4)]
    errors: list[Exception] = []

    def worker(worker_id: int) -> None:
        try:
            for n in range(10):
                stores[worker_id % len(stores)].insert({"id": f"{worker_id}-{n}"})
        except Exception as exc:  # pragma: no cover - falha reportada abaixo
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(_on_disk(store_path)) == 80
    assert len({r["id"] for r in _on_disk(store_path)}) == 80


def test_reads_see_external_changes(store_path):
    store = JsonCollectionStore(store_path)
    other = JsonCollectionStore(store_path)
    other.insert({"id": "a1", "name": "Bingo"})

    assert store.find_by_id("a1") == {"id": "a1", "name": "Bingo"}
    assert [r["id"] for r in store.find_by_field("name", "bingo")] == ["a1"]
    assert store.count() == 1

    other.remove("a1")
    assert store.find_by_id("a1") is None
    assert store.reload() == []


def test_corrupted_file_after_startup_fails_reads(store_path):
    store = JsonCollectionStore(store_path)
    store_path.write_text("[{", encoding="utf-8")
    with pytest.raises(CollectionLoadError):
        store.list()
    with pytest.raises(CollectionLoadError):
        store.insert({"id": "a1"})
    assert store_path.read_text(encoding="utf-8") == "[{"


def test_update_builds_from_current_record(store_path):
    store = JsonCollectionStore(store_path)
    store.insert({"id": "a1", "name": "Bingo", "status": "on"})

    updated = store.update("a1", lambda current: {**current, "status": "off"})
    assert updated == {"id": "a1", "name": "Bingo", "status": "off"}
    assert store.update("nope", lambda current: {"id": "nope"}) is None


def test_update_that_raises_writes_nothing(store_path):
    store = JsonCollectionStore(store_path)
    store.insert({"id": "a1", "name": "Bingo"})

    def _reject(current):
        raise ValueError("invalido")

    with pytest.raises(ValueError):
        store.update("a1", _reject)
    assert _on_disk(store_path) == [{"id": "a1", "name": "Bingo"}]
