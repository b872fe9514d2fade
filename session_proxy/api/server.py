#!/usr/bin/env python3
"""
# @file purpose: Server HTTP FastAPI del proxy sessioni Anchor Browser

Server HTTP REST API che inoltra le azioni sessione al provider:
- Preflight CORS e header CORS su ogni risposta
- Endpoint action-style unico e endpoint fissi per azione
- Conversione di ogni errore in un ErrorEnvelope JSON
"""

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from session_proxy import __version__
from session_proxy.api.client import ProviderResponse
from session_proxy.api.config import ProxySettings, load_settings
from session_proxy.api.errors import (
    ErrorEnvelope,
    MethodNotAllowedError,
    ProxyError,
    ValidationError,
)
from session_proxy.api.handler import SessionProxyHandler
from session_proxy.api.models import CreateSessionRequest, SessionRequest

# Configurazione logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

ALLOWED_METHODS = "POST, GET, DELETE, OPTIONS"
ALLOWED_HEADERS = "Content-Type, Authorization"


def _cors_headers(settings: ProxySettings, origin: Optional[str]) -> dict:
    headers = {
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }
    if "*" in settings.allowed_origins:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin and origin in settings.allowed_origins:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
    return headers


def _relay(result: ProviderResponse) -> Response:
    """Inoltra il body del provider invariato"""
    if result.status_code == 204:
        return Response(status_code=204)
    return JSONResponse(status_code=result.status_code, content=result.data)


def _format_stack(exc: BaseException, settings: ProxySettings) -> str:
    stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    if settings.api_key:
        stack = stack.replace(settings.api_key, "***")
    return stack


async def _read_json(request: Request, required: bool) -> Any:
    raw = await request.body()
    if not raw.strip():
        if required:
            raise ValidationError("Request body is missing.")
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError("Request body must be valid JSON.")


def get_handler(request: Request) -> SessionProxyHandler:
    return request.app.state.handler


def create_app(
    settings: Optional[ProxySettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> FastAPI:
    """Costruisce l'app FastAPI con settings e transport iniettati"""
    if settings is None:
        settings = load_settings()

    app = FastAPI(
        title="Anchor Session Proxy",
        description="Proxy REST verso l'API sessioni di Anchor Browser",
        version=__version__
    )
    app.state.settings = settings
    app.state.handler = SessionProxyHandler(settings, transport=transport)

    # Configura CORS
    @app.middleware("http")
    async def cors_middleware(request: Request, call_next):
        origin = request.headers.get("origin")
        if request.method == "OPTIONS":
            logger.debug(f"Preflight CORS su {request.url.path}")
            return Response(status_code=200, headers=_cors_headers(settings, origin))
        response = await call_next(request)
        response.headers.update(_cors_headers(settings, origin))
        return response

    # Exception handlers
    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        envelope = exc.to_envelope()
        if exc.status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path} -> {exc.status_code} {exc.kind}: {exc.message}")
            if settings.debug:
                envelope.stack = _format_stack(exc, settings)
        else:
            logger.warning(f"⚠️ {request.method} {request.url.path} -> {exc.status_code} {exc.kind}: {exc.message}")
        return _envelope_response(exc.status_code, envelope)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            logger.warning(f"⚠️ Metodo non consentito: {request.method} {request.url.path}")
            return await proxy_error_handler(request, MethodNotAllowedError())
        envelope = ErrorEnvelope(error=str(exc.detail), kind="http")
        return _envelope_response(exc.status_code, envelope)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = ValidationError("Invalid request.", details=jsonable_encoder(exc.errors()))
        return await proxy_error_handler(request, error)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"❌ Errore non gestito: {exc}", exc_info=True)
        envelope = ErrorEnvelope(error="Internal server error", kind="internal")
        if settings.debug:
            envelope.message = str(exc)
            envelope.stack = _format_stack(exc, settings)
        # Gira fuori dal middleware CORS
        response = _envelope_response(500, envelope)
        response.headers.update(_cors_headers(settings, request.headers.get("origin")))
        return response

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "ok",
            "message": "Anchor session proxy attivo",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "provider_url": settings.base_url,
            "api_key_configured": settings.api_key_configured
        }

    @app.post("/api/session")
    async def session_action(
        request: Request,
        handler: SessionProxyHandler = Depends(get_handler)
    ):
        """Endpoint unico: {action, sessionId?, config?, preset?}"""
        payload = await _read_json(request, required=True)
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object.")
        try:
            session_request = SessionRequest.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError("Invalid request body.", details=jsonable_encoder(e.errors()))

        logger.info(f"🚀 Azione ricevuta: {session_request.action}")
        return _relay(await handler.dispatch(session_request))

    @app.post("/api/create-session")
    async def create_session(
        request: Request,
        handler: SessionProxyHandler = Depends(get_handler)
    ):
        """Crea una sessione, body opzionale {config?, preset?} oppure config diretto"""
        payload = await _read_json(request, required=False)
        if payload is None:
            return _relay(await handler.create())
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object.")
        if "config" not in payload and "preset" not in payload:
            return _relay(await handler.create(payload))
        try:
            body = CreateSessionRequest.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError("Invalid request body.", details=jsonable_encoder(e.errors()))
        return _relay(await handler.create(body.config, body.preset))

    @app.get("/api/sessions")
    async def list_sessions(handler: SessionProxyHandler = Depends(get_handler)):
        return _relay(await handler.list())

    @app.post("/api/sessions/{session_id}/pause")
    async def pause_session(session_id: str, handler: SessionProxyHandler = Depends(get_handler)):
        return _relay(await handler.pause(session_id))

    @app.post("/api/sessions/{session_id}/resume")
    async def resume_session(session_id: str, handler: SessionProxyHandler = Depends(get_handler)):
        return _relay(await handler.resume(session_id))

    @app.delete("/api/sessions/{session_id}")
    async def terminate_session(session_id: str, handler: SessionProxyHandler = Depends(get_handler)):
        return _relay(await handler.terminate(session_id))

    return app


def _envelope_response(status_code: int, envelope: ErrorEnvelope) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope.model_dump(exclude_none=True))


# Inizializza FastAPI app
app = create_app()


# Funzione per avvio server
def run_server(
    host: str = "0.0.0.0",
    port: int = 8000,
    reload: bool = False
):
    """Avvia il server FastAPI"""
    logger.info(f"🚀 Avvio Anchor session proxy su {host}:{port}")

    uvicorn.run(
        "session_proxy.api.server:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Anchor Browser Session Proxy Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host address")
    parser.add_argument("--port", type=int, default=8000, help="Port number")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    run_server(host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
