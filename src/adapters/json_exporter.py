"""Exportación JSON de registros.

Stable output (sorted keys, UTF-8) so exports diff cleanly between runs.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from core.domain.models import Record


def export_records_json(*, records: Iterable[Record], output_path: Path) -> Path:
    """Write `records` as a JSON array and return the path."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [record.model_dump(mode="json") for record in records]
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
