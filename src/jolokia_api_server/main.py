# src/jolokia_api_server/main.py

import logging
from functools import partial
from typing import List, Optional

import httpx
from fastapi import FastAPI, Request

from .config import Settings, get_settings
from .jolokia import ArtemisJolokia
from .models import ApiInfo, Broker
from .security import SessionGateMiddleware, internal_server_error, router as security_router
from .session_store import SessionStore
from .tokens import TokenService
from .validation import InputValidator

logger = logging.getLogger(__name__)

API_VERSION = "v1"


def create_app(
        settings: Optional[Settings] = None,
        jolokia_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Builds the API server. Collaborators are created here from the settings
    and kept on app.state so handlers and the session gate share them.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Jolokia API Server",
        description="Authenticating gateway between the Artemis console and broker Jolokia endpoints.",
        version=settings.PLUGIN_VERSION,
    )

    token_service = TokenService(settings.SECRET_ACCESS_TOKEN)
    session_store = SessionStore()

    app.state.settings = settings
    app.state.validator = InputValidator(settings)
    app.state.token_service = token_service
    app.state.session_store = session_store
    app.state.jolokia_factory = partial(
        ArtemisJolokia,
        verify_tls=settings.JOLOKIA_VERIFY_TLS,
        timeout=settings.JOLOKIA_TIMEOUT_SECONDS,
        transport=jolokia_transport,
    )

    app.add_middleware(
        SessionGateMiddleware,
        token_service=token_service,
        session_store=session_store,
    )

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return internal_server_error()

    app.include_router(security_router)

    @app.get("/")
    async def home():
        return {"message": f"{settings.PLUGIN_NAME} is running"}

    @app.get("/api/v1/api-info", response_model=ApiInfo, response_model_by_alias=True)
    async def api_info():
        return ApiInfo(
            api_version=API_VERSION,
            plugin_name=settings.PLUGIN_NAME,
            plugin_version=settings.PLUGIN_VERSION,
        )

    @app.get("/api/v1/brokers", response_model=List[Broker])
    async def list_brokers(request: Request):
        jolokia: ArtemisJolokia = request.state.jolokia
        names = await jolokia.list_brokers()
        return [Broker(name=name) for name in names]

    return app
