#!/usr/bin/env python3
"""
# @file purpose: Modelli Pydantic per le richieste in ingresso
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionAction(str, Enum):
    """Azioni supportate dal proxy"""
    CREATE = "create"
    PAUSE = "pause"
    RESUME = "resume"
    TERMINATE = "terminate"
    LIST = "list"



class SessionRequest(BaseModel):
    """Richiesta action-style: {action, sessionId?, config?, preset?}"""
    model_config = ConfigDict(populate_by_name=True)

    action: Optional[str] = None
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    config: Optional[Any] = None
    preset: Optional[str] = None


class CreateSessionRequest(BaseModel):
    """Body opzionale per POST /api/create-session"""
    config: Optional[Dict[str, Any]] = None
    preset: Optional[str] = None
