#!/usr/bin/env python3
"""
Conferir os arquivos JSON das colecoes: ids duplicados, campos obrigatorios
ausentes e campos desconhecidos.

Uso:
  python scripts/check_data.py [--data-dir ./data]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Garante que o pacote school_api seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from school_api.core.config import get_settings  # noqa: E402
from school_api.core.errors import CollectionLoadError, ValidationError  # noqa: E402
from school_api.domain.resources import ID_FIELD, RESOURCES, ResourceDefinition  # noqa: E402
from school_api.domain.validation import validate_payload  # noqa: E402
from school_api.repositories.json_storage import read_collection  # noqa: E402


def check_collection(resource: ResourceDefinition, data_dir: Path) -> list[str]:
    path = data_dir / resource.filename
    try:
        records = read_collection(path)
    except CollectionLoadError as exc:
        return [exc.message]
    problems: list[str] = []
    seen: set = set()
    for position, record in enumerate(records):
        record_id = record.get(ID_FIELD)
        if not record_id:
            problems.append(f"{resource.filename}[{position}]: registro sem id")
        elif record_id in seen:
            problems.append(f"{resource.filename}[{position}]: id duplicado {record_id}")
        seen.add(record_id)
        try:
            validate_payload(record, resource)
        except ValidationError as exc:
            problems.append(f"{resource.filename}[{position}]: {exc.message}")
    return problems


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Validar arquivos JSON das colecoes")
    ap.add_argument("--data-dir", help="Diretorio dos arquivos JSON (default: DATA_DIR)")
    args = ap.parse_args(argv)

    data_dir = Path(args.data_dir) if args.data_dir else get_settings().data_dir
    problems: list[str] = []
    for resource in RESOURCES:
        problems.extend(check_collection(resource, data_dir))
    if problems:
        for line in problems:
            print(f"[ERRO] {line}")
        return 1
    print(f"OK: {len(RESOURCES)} colecoes conferidas em {data_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
