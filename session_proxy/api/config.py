#!/usr/bin/env python3
"""
# @file purpose: Configurazione del proxy letta una sola volta dall'environment

Le impostazioni vengono risolte all'avvio e passate esplicitamente
all'handler, nessuna costante globale con la chiave API.
"""

import logging
import os
from typing import List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.anchorbrowser.io"
DEFAULT_TIMEOUT_SECONDS = 15.0

_TRUTHY = {"1", "true", "yes", "on"}


class ProxySettings(BaseModel):
    """Impostazioni del proxy sessioni"""
    api_key: Optional[str] = Field(default=None, repr=False)
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])
    debug: bool = False

    @property
    def api_key_configured(self) -> bool:
        return bool(self.api_key)


def load_settings(environ: Optional[dict] = None) -> ProxySettings:
    """Costruisce ProxySettings dalle variabili d'ambiente"""
    env = os.environ if environ is None else environ

    api_key = env.get("ANCHOR_API_KEY") or None
    if not api_key:
        logger.warning("⚠️ ANCHOR_API_KEY non impostata, le chiamate al provider falliranno")

    origins = [o.strip() for o in env.get("ALLOWED_ORIGINS", "*").split(",") if o.strip()]
    debug = (
        env.get("SESSION_PROXY_DEBUG", "").lower() in _TRUTHY
        or env.get("APP_ENV", "").lower() == "development"
    )

    settings = ProxySettings(
        api_key=api_key,
        base_url=env.get("ANCHOR_API_URL", DEFAULT_BASE_URL).rstrip("/"),
        request_timeout=float(env.get("ANCHOR_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)),
        allowed_origins=origins or ["*"],
        debug=debug,
    )

    logger.info(f"✅ Proxy configurato - provider: {settings.base_url}, timeout: {settings.request_timeout}s")
    logger.info(f"✅ CORS configurato per origins: {settings.allowed_origins}")
    return settings
