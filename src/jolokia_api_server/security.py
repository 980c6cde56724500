# src/jolokia_api_server/security.py

import logging
from typing import Optional

from fastapi import APIRouter, Form, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .jolokia import ArtemisJolokia
from .models import LoginResponse, StatusMessage
from .session_store import SessionStore
from .tokens import SessionExpiredError, TokenService

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1/"
LOGIN_PATH = "/api/v1/jolokia/login"
API_INFO_PATH = "/api/v1/api-info"
SESSION_HEADER = "jolokia-session-id"

SESSION_EXPIRED_MESSAGE = "This session has expired. Please login again"


def failed(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=StatusMessage(status="failed", message=message).model_dump(),
    )


def internal_server_error() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=StatusMessage(status="error", message="Internal Server Error").model_dump(),
    )


def ignore_auth(path: str) -> bool:
    return path == LOGIN_PATH or path == API_INFO_PATH or not path.startswith(API_PREFIX)


# --- Session gate ---
class SessionGateMiddleware(BaseHTTPMiddleware):
    """
    Lets allow-listed paths through and requires a valid session token on
    everything else under /api/v1/. The verified Jolokia handle is placed
    on request.state.jolokia for the route handlers.
    """

    def __init__(self, app, token_service: TokenService, session_store: SessionStore):
        super().__init__(app)
        self.token_service = token_service
        self.session_store = session_store

    async def dispatch(self, request: Request, call_next):
        try:
            rejection = self.check_session(request)
        except Exception:
            logger.exception("Unexpected error while checking session for %s", request.url.path)
            return internal_server_error()

        if rejection is not None:
            return rejection
        return await call_next(request)

    def check_session(self, request: Request) -> Optional[Response]:
        if ignore_auth(request.url.path):
            return None

        token = request.headers.get(SESSION_HEADER)
        if not token:
            return Response(status_code=status.HTTP_401_UNAUTHORIZED)

        try:
            broker_name = self.token_service.verify(token)
        except SessionExpiredError as e:
            logger.info("Rejected session token: %s", e)
            return failed(status.HTTP_401_UNAUTHORIZED, SESSION_EXPIRED_MESSAGE)

        jolokia = self.session_store.get(broker_name)
        if jolokia is None:
            logger.info("No live session for broker %r", broker_name)
            return failed(status.HTTP_401_UNAUTHORIZED, SESSION_EXPIRED_MESSAGE)

        request.state.jolokia = jolokia
        return None


# --- Login ---
router = APIRouter(prefix="/api/v1/jolokia", tags=["security"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": StatusMessage}, 500: {"model": StatusMessage}},
)
async def login(
        request: Request,
        broker_name: Optional[str] = Form(None, alias="brokerName"),
        user_name: Optional[str] = Form(None, alias="userName"),
        password: Optional[str] = Form(None),
        jolokia_host: Optional[str] = Form(None, alias="jolokiaHost"),
        scheme: Optional[str] = Form(None),
        port: Optional[str] = Form(None),
):
    """
    Checks the submitted Jolokia credentials against the broker and, if they
    are accepted, returns a session token for the broker name.

    curl -k -d brokerName=amq-broker -d userName=admin -d password=admin
         -d jolokiaHost=localhost -d scheme=http -d port=8161
         -X POST https://localhost:9443/api/v1/jolokia/login
    """
    state = request.app.state

    valid_host = state.validator.validate_host(jolokia_host)
    if not valid_host:
        return failed(status.HTTP_401_UNAUTHORIZED, "Invalid jolokia host name.")
    valid_scheme = state.validator.validate_scheme(scheme)
    if not valid_scheme:
        return failed(status.HTTP_401_UNAUTHORIZED, "Invalid jolokia scheme.")
    valid_port = state.validator.validate_port(port)
    if not valid_port:
        return failed(status.HTTP_401_UNAUTHORIZED, "Invalid jolokia port.")
    if not broker_name:
        logger.warning("login without a broker name")
        return failed(status.HTTP_401_UNAUTHORIZED, "Invalid broker name.")

    jolokia: ArtemisJolokia = state.jolokia_factory(
        user_name, password, valid_host, valid_scheme, valid_port
    )

    try:
        valid_user = await jolokia.validate_user()
    except Exception:
        logger.exception("got exception while login to %s", jolokia.base_url)
        return failed(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal error")

    if not valid_user:
        return failed(status.HTTP_401_UNAUTHORIZED, "Invalid credential. Please try again.")

    token_service: TokenService = state.token_service
    expires_at = token_service.expiry_from_now()
    token = token_service.issue(broker_name, expires_at=expires_at)
    state.session_store.set(broker_name, jolokia, expires_at)
    logger.info("Broker %r logged in through %s", broker_name, jolokia.base_url)

    return JSONResponse(
        content=LoginResponse(
            status="success",
            message="You have successfully logged in.",
            session_id=token,
        ).model_dump(by_alias=True),
    )
