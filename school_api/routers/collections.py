"""
Generic CRUD router applied to every collection.

The service is never imported as a module global: each endpoint resolves it
from ``app.state.collections`` so tests can build apps over temp directories.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Request

from school_api.domain.resources import Lookup, ResourceDefinition
from school_api.services.collection_service import CollectionService

logger = logging.getLogger(__name__)


def get_collection(request: Request, name: str) -> CollectionService:
    collections = getattr(getattr(request.app, "state", None), "collections", None)
    if not collections or name not in collections:
        raise RuntimeError(f"Colecao '{name}' nao configurada")
    return collections[name]


def build_router(resource: ResourceDefinition) -> APIRouter:
    router = APIRouter(prefix=resource.prefix, tags=[resource.tag])
    name = resource.name

    def list_records(request: Request):
        return get_collection(request, name).list()

    def get_record(record_id: str, request: Request):
        logger.debug("%s: id recebido na requisicao: %s", name, record_id)
        return get_collection(request, name).get(record_id)

    def create_record(request: Request, payload: Any = Body(None, examples=[resource.example])):
        return get_collection(request, name).create(payload)

    def replace_record(record_id: str, request: Request, payload: Any = Body(None, examples=[resource.example])):
        logger.debug("%s: id recebido na requisicao: %s", name, record_id)
        return get_collection(request, name).replace(record_id, payload)

    def delete_record(record_id: str, request: Request):
        logger.debug("%s: id recebido na requisicao: %s", name, record_id)
        return [get_collection(request, name).remove(record_id)]

    def _lookup_endpoint(lookup: Lookup):
        def find_records(value: str, request: Request):
            logger.debug("%s: %s recebido na requisicao: %s", name, lookup.field, value)
            return get_collection(request, name).find(lookup.segment, value)

        find_records.__name__ = f"find_{name}_by_{lookup.segment}"
        return find_records

    router.add_api_route("", list_records, methods=["GET"], summary=f"Lista {resource.tag.lower()}")
    router.add_api_route("", create_record, methods=["POST"], summary=f"Cria {resource.label.lower()}")
    for path in ("/id/{record_id}", "/{record_id}"):
        router.add_api_route(path, get_record, methods=["GET"], summary=f"Busca {resource.label.lower()} pelo id")
        router.add_api_route(path, replace_record, methods=["PUT"], summary=f"Substitui {resource.label.lower()}")
        router.add_api_route(path, delete_record, methods=["DELETE"], summary=f"Remove {resource.label.lower()}")
    for lookup in resource.lookups:
        router.add_api_route(
            f"/{lookup.segment}/{{value}}",
            _lookup_endpoint(lookup),
            methods=["GET"],
            summary=f"Busca {resource.tag.lower()} por '{lookup.field}'",
        )
    return router
