"""Exportación JSON de listados.

Por qué JSON:
- Interoperabilidad con scripts/pipelines que consumen la config de GoCD.
- Formato estable (sort_keys) para poder diffear dos exportaciones.
"""

from __future__ import annotations

import json
from pathlib import Path

from gocd_client.core.domain.models import PipelineGroups


def dump_pipeline_groups(groups: PipelineGroups) -> str:
    payload = groups.model_dump(mode="json")
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_pipeline_groups_json(*, groups: PipelineGroups, output_path: Path) -> Path:
    """Exporta `PipelineGroups` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_pipeline_groups(groups), encoding="utf-8")
    return output_path
