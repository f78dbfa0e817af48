"""Core services for layout config, render sessions, logging and diagnostics."""

from .config import (
    CONFIG_KEYS,
    ConfigError,
    coerce_update,
    config_path,
    config_to_dict,
    load_config,
    parse_config_update,
    save_config,
)
from .diagnostics import build_doctor_payload
from .session import RenderSession, create_image, render

__all__ = [
    "CONFIG_KEYS",
    "ConfigError",
    "RenderSession",
    "build_doctor_payload",
    "config_path",
    "coerce_update",
    "config_to_dict",
    "create_image",
    "load_config",
    "parse_config_update",
    "render",
    "save_config",
]
