#!/usr/bin/env python3
"""
# @file purpose: Tabella dichiarativa dei preset di configurazione sessione

Ogni preset descrive il SessionConfig inviato al provider, diviso nelle
sezioni "session" e "browser". Gli override del chiamante vengono uniti
con un merge shallow per sezione.
"""

import copy
import time
from typing import Any, Dict, Mapping, Optional

from session_proxy.api.errors import ValidationError

DEFAULT_PRESET = "default"

# Durata massima e idle timeout in secondi (~11.5 giorni)
LONG_TIMEOUT = 999999

DEFAULT_VIEWPORT = {"width": 1920, "height": 1080}

PRESETS: Dict[str, Dict[str, Dict[str, Any]]] = {
    "default": {
        "session": {
            "max_duration": LONG_TIMEOUT,
            "idle_timeout": LONG_TIMEOUT,
            "recording": {"active": False},
            "proxy": {"type": "anchor_residential", "country_code": "us", "active": False},
        },
        "browser": {
            "headless": {"active": False},
            "viewport": DEFAULT_VIEWPORT,
            "adblock": {"active": True},
            "popup_blocker": {"active": True},
            "captcha_solver": {"active": False},
        },
    },
    "ultra": {
        "session": {
            "max_duration": LONG_TIMEOUT,
            "idle_timeout": LONG_TIMEOUT,
            "recording": {"active": True},
            "initial_url": "https://anchorbrowser.io",
            "live_view": {"read_only": True},
            "proxy": {"type": "anchor_residential", "country_code": "us", "active": True},
        },
        "browser": {
            "headless": {"active": True},
            "fullscreen": {"active": True},
            "p2p_download": {"active": True},
            "captcha_solver": {"active": True},
            "viewport": DEFAULT_VIEWPORT,
            "adblock": {"active": True},
            "popup_blocker": {"active": True},
            # name viene generato in build_session_config
            "profile": {"persist": False},
            "extensions": [],
        },
    },
    "performance": {
        "session": {
            "max_duration": LONG_TIMEOUT,
            "idle_timeout": LONG_TIMEOUT,
            "recording": {"active": False},
            "proxy": {"active": False},
        },
        "browser": {
            "headless": {"active": True},
            "viewport": DEFAULT_VIEWPORT,
            "adblock": {"active": True},
            "popup_blocker": {"active": True},
        },
    },
    "minimal": {
        "session": {
            "max_duration": LONG_TIMEOUT,
            "idle_timeout": LONG_TIMEOUT,
        },
        "browser": {
            "headless": {"active": False},
        },
    },
}

SECTIONS = ("session", "browser")


def get_preset(name: Optional[str] = None) -> Dict[str, Dict[str, Any]]:
    """Restituisce una copia profonda del preset richiesto"""
    preset_name = name or DEFAULT_PRESET
    if preset_name not in PRESETS:
        raise ValidationError("Unknown configuration preset.", details={"preset": preset_name})
    return copy.deepcopy(PRESETS[preset_name])


def merge_config(
    defaults: Mapping[str, Any],
    overrides: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """
    Merge shallow per sezione: le chiavi di override sostituiscono quelle di
    default dentro "session" e "browser"; le altre chiavi top-level passano
    invariate. Nessuno dei due input viene modificato.
    """
    merged = copy.deepcopy(dict(defaults))
    if overrides is None:
        return merged

    if not isinstance(overrides, Mapping):
        raise ValidationError("Session config must be a JSON object.")

    for key, value in overrides.items():
        if key in SECTIONS:
            if not isinstance(value, Mapping):
                raise ValidationError(f"Config section '{key}' must be a JSON object.")
            section = merged.get(key) or {}
            section.update(copy.deepcopy(dict(value)))
            merged[key] = section
        else:
            merged[key] = copy.deepcopy(value)

    return merged


def build_session_config(
    overrides: Optional[Mapping[str, Any]] = None,
    preset: Optional[str] = None
) -> Dict[str, Any]:
    """Costruisce il body di creazione sessione da preset + override"""
    config = merge_config(get_preset(preset), overrides)

    browser_overrides = (overrides or {}).get("browser") or {}
    if "profile" in browser_overrides:
        return config

    # Profili del preset senza nome ricevono un nome univoco
    profile = config.get("browser", {}).get("profile")
    if isinstance(profile, dict) and not profile.get("name"):
        profile["name"] = f"session-profile-{int(time.time() * 1000)}"

    return config
