"""Agregador de settings do serviço.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# DealMaker settings
from config.settings.dealmaker import (
    CAPABILITY_ENV_VARS,
    DealmakerSettings,
    get_dealmaker_settings,
)

__all__ = [
    "CAPABILITY_ENV_VARS",
    "BaseSettings",
    "DealmakerSettings",
    "Environment",
    "get_base_settings",
    "get_dealmaker_settings",
]
