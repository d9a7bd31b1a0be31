#!/usr/bin/env python3
"""
Cadastrar um registro numa colecao diretamente no arquivo JSON.

Uso:
  python scripts/add_record.py students --field name="Bingo Heeler" --field age=6 ...
  python scripts/add_record.py events --field description="Feira" [--data-dir ./data]
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Garante que o pacote school_api seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from school_api.core.config import get_settings  # noqa: E402
from school_api.core.errors import CollectionError  # noqa: E402
from school_api.domain.resources import RESOURCES, USERS, get_resource  # noqa: E402
from school_api.services.collection_service import CollectionService  # noqa: E402
from school_api.services.user_service import users_resource  # noqa: E402


def parse_fields(pairs: list[str]) -> dict:
    payload: dict = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise SystemExit(f"Campo invalido (use chave=valor): {pair}")
        payload[key.strip()] = value
    return payload


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Cadastrar registro numa colecao JSON")
    ap.add_argument("collection", choices=[r.name for r in RESOURCES], help="Nome da colecao")
    ap.add_argument("--field", action="append", default=[], help="Campo no formato chave=valor (repetivel)")
    ap.add_argument("--data-dir", help="Diretorio dos arquivos JSON (default: DATA_DIR)")
    args = ap.parse_args(argv)

    settings = get_settings()
    resource = get_resource(args.collection)
    if resource.name == USERS.name:
        resource = users_resource(settings.hash_user_passwords)
    data_dir = Path(args.data_dir) if args.data_dir else settings.data_dir
    service = CollectionService.from_data_dir(resource, data_dir)

    try:
        record = service.create(parse_fields(args.field))
    except CollectionError as exc:
        sys.stderr.write(f"Erro: {exc.message}\n")
        return 1
    print("OK: registro cadastrado")
    print(json.dumps(record, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
