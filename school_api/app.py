import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from school_api.core.config import Settings, get_settings
from school_api.core.errors import CollectionError, StorageError
from school_api.core.logging_config import setup_logging
from school_api.domain.resources import RESOURCES, USERS
from school_api.routers import health as health_router
from school_api.routers.collections import build_router
from school_api.services.collection_service import CollectionService
from school_api.services.user_service import users_resource

logger = logging.getLogger(__name__)

API_DESCRIPTION = """API para demonstração de Documentação API via Swagger.

Coleções de estudantes, professores, usuários, agendamentos, profissionais e
eventos, cada uma persistida em um arquivo JSON.
"""


def build_collections(settings: Settings, data_dir: Path | None = None) -> dict[str, CollectionService]:
    """Instancia um servico (e seu store) por recurso; arquivos corrompidos abortam a inicializacao."""
    base = Path(data_dir) if data_dir is not None else settings.data_dir
    collections: dict[str, CollectionService] = {}
    for resource in RESOURCES:
        if resource.name == USERS.name:
            resource = users_resource(settings.hash_user_passwords)
        collections[resource.name] = CollectionService.from_data_dir(resource, base)
    return collections


def _error_response(exc: CollectionError) -> JSONResponse:
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


# respostas do roteamento (rota inexistente, metodo errado) no mesmo formato
_HTTP_ERRORS = {
    404: ("Rota não encontrada", "not_found"),
    405: ("Método não permitido", "method_not_allowed"),
}


def create_app(settings: Settings | None = None, data_dir: Path | None = None) -> FastAPI:
    """Factory compatível com uvicorn (``--factory``)."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.api_title,
        version="1.0.0",
        description=API_DESCRIPTION,
        docs_url="/api-docs",
    )

    origins = list(settings.cors_origins) or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(CollectionError)
    async def collection_error_handler(request: Request, exc: CollectionError):
        if isinstance(exc, StorageError):
            logger.error("%s %s: %s", request.method, request.url.path, exc.message, exc_info=exc)
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"erro": "JSON inválido no corpo da requisição", "code": "invalid_body"}, status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message, code = _HTTP_ERRORS.get(exc.status_code, (str(exc.detail), "http_error"))
        return JSONResponse({"erro": message, "code": code}, status_code=exc.status_code, headers=exc.headers)

    app.state.settings = settings
    app.state.collections = build_collections(settings, data_dir)

    app.include_router(health_router.router)
    for resource in RESOURCES:
        app.include_router(build_router(resource))

    logger.info("Aplicacao configurada com %d colecoes", len(app.state.collections))
    return app
