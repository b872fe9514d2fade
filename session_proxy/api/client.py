#!/usr/bin/env python3
"""
# @file purpose: Client HTTP verso l'API Anchor Browser

Una sola chiamata in uscita per operazione, limitata da un timeout
esplicito. Nessun retry: ogni errore è terminale per la richiesta.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import httpx

from session_proxy.api.config import ProxySettings
from session_proxy.api.errors import (
    ConfigurationError,
    TransportError,
    UpstreamError,
    UpstreamTimeoutError,
)

logger = logging.getLogger(__name__)

API_KEY_HEADER = "anchor-api-key"
SESSIONS_PATH = "/v1/sessions"


@dataclass
class ProviderResponse:
    """Risposta 2xx del provider, body opaco"""
    status_code: int
    data: Any


class AnchorClient:
    """Client per gli endpoint sessione del provider"""

    def __init__(
        self,
        settings: ProxySettings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.settings = settings
        self.transport = transport

    def _headers(self) -> dict:
        if not self.settings.api_key:
            raise ConfigurationError("Anchor API key is not configured.")
        return {
            API_KEY_HEADER: self.settings.api_key,
            "Content-Type": "application/json",
        }

    def _redact(self, text: str) -> str:
        if self.settings.api_key:
            return text.replace(self.settings.api_key, "***")
        return text

    async def create_session(self, config: dict) -> ProviderResponse:
        return await self.request("POST", SESSIONS_PATH, json_body=config)

    async def pause_recording(self, session_id: str) -> ProviderResponse:
        return await self.request("POST", f"{SESSIONS_PATH}/{quote(session_id, safe='')}/recordings/pause")

    async def resume_recording(self, session_id: str) -> ProviderResponse:
        return await self.request("POST", f"{SESSIONS_PATH}/{quote(session_id, safe='')}/recordings/resume")

    async def delete_session(self, session_id: str) -> ProviderResponse:
        return await self.request("DELETE", f"{SESSIONS_PATH}/{quote(session_id, safe='')}")

    async def list_sessions(self) -> ProviderResponse:
        return await self.request("GET", SESSIONS_PATH)

    async def request(
        self,
        method: str,
        path: str,
        json_body: Optional[dict] = None
    ) -> ProviderResponse:
        """Esegue la chiamata e normalizza risposta o errore"""
        headers = self._headers()
        timeout = self.settings.request_timeout

        logger.info(f"🌐 {method} {path} verso Anchor API")

        try:
            async with httpx.AsyncClient(
                base_url=self.settings.base_url,
                timeout=timeout,
                transport=self.transport
            ) as client:
                response = await asyncio.wait_for(
                    client.request(method, path, headers=headers, json=json_body),
                    timeout=timeout
                )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.error(f"⏰ Timeout dopo {timeout}s su {method} {path}")
            raise UpstreamTimeoutError()
        except httpx.HTTPError as e:
            reason = self._redact(str(e)) or type(e).__name__
            logger.error(f"❌ Errore di rete verso Anchor API: {reason}")
            raise TransportError(
                "Failed to communicate with Anchor API or process response.",
                reason=reason
            ) from e

        logger.info(f"📡 Anchor API Response Status: {response.status_code}")
        data = self._parse_body(response)

        if not response.is_success:
            logger.error(f"❌ Errore da Anchor API: {data}")
            message = None
            if isinstance(data, dict):
                message = data.get("message") or data.get("error")
            raise UpstreamError(
                message if isinstance(message, str) and message else "Unknown error from Anchor API",
                status_code=response.status_code,
                details=data
            )

        return ProviderResponse(status_code=response.status_code, data=data)

    def _parse_body(self, response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return json.loads(response.content)
        except ValueError as e:
            logger.error(f"❌ JSON non valido da Anchor API (status {response.status_code})")
            raise TransportError(
                "Failed to communicate with Anchor API or process response.",
                reason=f"Invalid JSON in response: {e}"
            ) from e
