from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EndpointConfig, EnvOverrides

__all__ = ["AppConfig", "EndpointConfig", "EnvOverrides", "load_config"]
