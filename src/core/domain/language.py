"""Language options for user-facing messages.

Kept in the domain layer so errors, config and CLI share a single source of
truth without importing adapters.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported languages for error messages and CLI copy."""

    ENGLISH = "en"
    SPANISH = "es"
