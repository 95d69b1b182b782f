"""Identifier and formatting helpers.

Pure functions, no I/O. Shared by the client (to recover ids from resource
locators) and by presentation layers.
"""

from __future__ import annotations

import re
from typing import Mapping
from urllib.parse import urlencode

_TRAILING_ID_RE = re.compile(r"/(\d+)/?$")


def extract_id_from_locator(url: str) -> int:
    """Return the trailing integer segment of a resource locator, or 0.

    `"https://pokeapi.co/api/v2/pokemon/25/"` -> 25
    """

    if not isinstance(url, str):
        return 0
    match = _TRAILING_ID_RE.search(url)
    return int(match.group(1)) if match else 0


def format_id(record_id: int, width: int = 3) -> str:
    """Zero-pad on the left; never truncates (`format_id(1234) == "1234"`)."""

    return str(record_id).zfill(width)


def convert_height_units(raw: int) -> float:
    """Tenths of a metre -> metres."""

    return raw / 10


def convert_weight_units(raw: int) -> float:
    """Tenths of a kilogram -> kilograms."""

    return raw / 10


def format_name(name: str) -> str:
    """`"mr-mime"` -> `"Mr Mime"`."""

    return " ".join(word[:1].upper() + word[1:] for word in name.split("-"))


def build_endpoint(path: str, params: Mapping[str, str | int] | None = None) -> str:
    """Relative endpoint with an encoded query string (`/pokemon?limit=5`)."""

    endpoint = "/" + path.lstrip("/")
    if not params:
        return endpoint
    return f"{endpoint}?{urlencode({k: str(v) for k, v in params.items()})}"
