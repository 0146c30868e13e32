"""Exportación JSON de una respuesta del router.

Por qué JSON:
- Interoperabilidad con la capa de chat u otros pipelines.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import Response


def export_response_json(*, response: Response, output_path: Path) -> Path:
    """Exporta la respuesta a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = response.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
