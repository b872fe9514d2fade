# @file purpose: Definisce il modulo API del proxy sessioni Anchor Browser
#
# Questo modulo fornisce:
# - Server HTTP FastAPI che inoltra le richieste al provider
# - Merge tra preset di configurazione e override del chiamante
# - Mappatura errori verso un unico envelope JSON

"""
Session proxy API module for the Anchor Browser remote-browser service.

Provides HTTP REST API endpoints for:
- Session creation with preset and override merging
- Recording pause/resume for a running session
- Session termination and listing
"""

from session_proxy.api.config import ProxySettings, load_settings
from session_proxy.api.handler import SessionProxyHandler

__all__ = ["ProxySettings", "SessionProxyHandler", "load_settings"]
