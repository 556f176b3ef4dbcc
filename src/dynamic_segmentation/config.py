"""Layer configuration: attribute names and rendering defaults.

Defaults can be overridden through ``DYNSEG_*`` environment variables via
``LayerOptions.from_env()``; unparseable values fall back to the default.
"""

from __future__ import annotations

import os

from pydantic import BaseModel

ENV_PREFIX = "DYNSEG_"


def _env_str(key: str, default: str) -> str:
    value = os.getenv(ENV_PREFIX + key)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(key: str, default: int) -> int:
    value = os.getenv(ENV_PREFIX + key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


class LayerOptions(BaseModel):
    """Names of the GeoJSON properties the layer reads and writes."""

    id_attribute: str = "id"
    start_attribute: str = "start"
    end_attribute: str = "end"
    style_attribute: str = "value"
    weight: int = 4
    fallback_color: str = "grey"

    @classmethod
    def from_env(cls) -> "LayerOptions":
        defaults = cls()
        return cls(
            id_attribute=_env_str("ID_ATTRIBUTE", defaults.id_attribute),
            start_attribute=_env_str("START_ATTRIBUTE", defaults.start_attribute),
            end_attribute=_env_str("END_ATTRIBUTE", defaults.end_attribute),
            style_attribute=_env_str("STYLE_ATTRIBUTE", defaults.style_attribute),
            weight=_env_int("WEIGHT", defaults.weight),
            fallback_color=_env_str("FALLBACK_COLOR", defaults.fallback_color),
        )
