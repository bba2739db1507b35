"""Serialises a finished manifest into the metadata document."""

from __future__ import annotations

from typing import Any, Dict, List

import yaml

from .models import ComponentEntry, Manifest

REQUIRED = "Required"
OPTIONAL = "Optional"


def manifest_to_document(manifest: Manifest) -> Dict[str, Any]:
    """Return the metadata document as plain mappings and lists."""
    parts: List[Dict[str, Any]] = []
    for part in manifest.parts:
        parts.append(
            {
                "name": part.name,
                "Components": [_component_document(entry) for entry in part.components],
            }
        )
    return {"Parts": parts}


def _component_document(entry: ComponentEntry) -> Dict[str, Any]:
    document: Dict[str, Any] = {
        "name": entry.name,
        "type": REQUIRED if entry.required else OPTIONAL,
    }
    if entry.required_templates:
        document["requiredTemplates"] = list(entry.required_templates)
    if entry.optional_templates:
        document["optionalTemplates"] = list(entry.optional_templates)
    return document


def dump_manifest(manifest: Manifest) -> str:
    """Render the manifest as YAML, keeping discovery order."""
    return yaml.safe_dump(
        manifest_to_document(manifest),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


__all__ = ["OPTIONAL", "REQUIRED", "dump_manifest", "manifest_to_document"]
