"""Part and component name resolution for templates."""

from __future__ import annotations

from pathlib import PurePath
from typing import Optional, Tuple


def resolve_names(
    path: str | PurePath,
    part_name: Optional[str] = None,
    component_name: Optional[str] = None,
) -> Tuple[str, str]:
    """Return ``(part, component)`` for a template path.

    Explicit directive names win. Otherwise the component is the parent
    directory name and the part is the grandparent directory name.
    """
    template = PurePath(path)
    part = (part_name or "").strip() or _directory_name(template.parent.parent)
    component = (component_name or "").strip() or _directory_name(template.parent)
    return part, component


def _directory_name(directory: PurePath) -> str:
    # the filesystem root has no name; use its anchor instead
    return directory.name or str(directory)


__all__ = ["resolve_names"]
