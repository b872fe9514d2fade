#!/usr/bin/env python3
"""
# @file purpose: Tassonomia errori del proxy e envelope di risposta

Ogni errore sollevato da handler e client è una sottoclasse di ProxyError
e viene convertito in ErrorEnvelope al confine HTTP.
"""

from typing import Any, Optional

from pydantic import BaseModel


class ErrorEnvelope(BaseModel):
    """Forma unica degli errori restituiti al chiamante"""
    error: str
    kind: str
    details: Optional[Any] = None
    message: Optional[str] = None
    stack: Optional[str] = None


class ProxyError(Exception):
    """Errore base del proxy"""

    status_code: int = 500
    kind: str = "internal"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Any] = None
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_envelope(self) -> ErrorEnvelope:
        return ErrorEnvelope(error=self.message, kind=self.kind, details=self.details)


class ValidationError(ProxyError):
    """Richiesta non valida, nessuna chiamata verso il provider"""
    status_code = 400
    kind = "validation"


class MethodNotAllowedError(ValidationError):
    status_code = 405
    kind = "method_not_allowed"

    def __init__(self, message: str = "Method not allowed"):
        super().__init__(message)


class UpstreamError(ProxyError):
    """Il provider ha risposto con uno status non 2xx"""
    kind = "upstream"


class UpstreamTimeoutError(ProxyError):
    status_code = 504
    kind = "timeout"

    def __init__(self, message: str = "Request to Anchor API timed out."):
        super().__init__(message)


class TransportError(ProxyError):
    """Errore di rete, DNS o JSON malformato dal provider"""
    status_code = 500
    kind = "transport"

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message)
        self.reason = reason

    def to_envelope(self) -> ErrorEnvelope:
        envelope = super().to_envelope()
        envelope.message = self.reason
        return envelope


class ConfigurationError(ProxyError):
    status_code = 500
    kind = "configuration"
