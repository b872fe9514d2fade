#!/usr/bin/env python3
"""
# @file purpose: Handler del proxy sessioni, una operazione per azione

Valida la richiesta, costruisce la chiamata in uscita tramite AnchorClient
e restituisce la risposta del provider invariata. Nessuno stato locale:
il ciclo di vita della sessione appartiene al provider.
"""

import logging
from typing import Any, Mapping, Optional

import httpx

from session_proxy.api.client import AnchorClient, ProviderResponse
from session_proxy.api.config import ProxySettings
from session_proxy.api.errors import ValidationError
from session_proxy.api.models import SessionAction, SessionRequest
from session_proxy.api.presets import build_session_config

logger = logging.getLogger(__name__)


def require_session_id(session_id: Optional[str]) -> str:
    if not isinstance(session_id, str) or not session_id.strip():
        raise ValidationError("Session ID is required.")
    return session_id.strip()


class SessionProxyHandler:
    """Inoltra le azioni sessione all'API Anchor Browser"""

    def __init__(
        self,
        settings: ProxySettings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.settings = settings
        self.client = AnchorClient(settings, transport=transport)

    async def create(
        self,
        config_overrides: Optional[Mapping[str, Any]] = None,
        preset: Optional[str] = None
    ) -> ProviderResponse:
        """Crea una sessione con preset + override del chiamante"""
        config = build_session_config(config_overrides, preset)
        logger.info(f"🔄 Creazione sessione Anchor (preset: {preset or 'default'})")
        result = await self.client.create_session(config)
        logger.info("✅ Sessione Anchor creata, risposta inoltrata")
        return result

    async def pause(self, session_id: Optional[str]) -> ProviderResponse:
        session_id = require_session_id(session_id)
        logger.info(f"⏸️ Pausa registrazione sessione: {session_id}")
        return await self.client.pause_recording(session_id)

    async def resume(self, session_id: Optional[str]) -> ProviderResponse:
        session_id = require_session_id(session_id)
        logger.info(f"▶️ Ripresa registrazione sessione: {session_id}")
        return await self.client.resume_recording(session_id)

    async def terminate(self, session_id: Optional[str]) -> ProviderResponse:
        session_id = require_session_id(session_id)
        logger.info(f"🧹 Terminazione sessione: {session_id}")
        return await self.client.delete_session(session_id)

    async def list(self) -> ProviderResponse:
        return await self.client.list_sessions()

    async def dispatch(self, request: SessionRequest) -> ProviderResponse:
        """Smista una richiesta action-style verso l'operazione corrispondente"""
        try:
            action = SessionAction(request.action)
        except ValueError:
            raise ValidationError("Invalid or unsupported action.")

        if action == SessionAction.CREATE:
            return await self.create(request.config, request.preset)
        if action == SessionAction.LIST:
            return await self.list()

        # pause / resume / terminate
        operation = {
            SessionAction.PAUSE: self.pause,
            SessionAction.RESUME: self.resume,
            SessionAction.TERMINATE: self.terminate,
        }[action]
        return await operation(request.session_id)
