"""Accumulates template records into the parts -> components hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .logging import get_logger
from .models import (
    BuildResult,
    ComponentConflict,
    ComponentEntry,
    Manifest,
    PartEntry,
    TemplateRecord,
)

DEFAULT_REQUIRED = True


@dataclass
class _ComponentState:
    name: str
    templates: List[TemplateRecord] = field(default_factory=list)
    declared_required: bool = False
    declared_optional: bool = False
    last_declared: Optional[bool] = None
    merged: Optional[bool] = None

    @property
    def conflicting(self) -> bool:
        return self.declared_required and self.declared_optional

    def fold(self, record: TemplateRecord) -> None:
        self.templates.append(record)
        directives = record.directives
        declared = directives.component_required
        if declared is not None:
            if directives.component_conflict:
                self.declared_required = self.declared_optional = True
            elif declared:
                self.declared_required = True
            else:
                self.declared_optional = True
            self.last_declared = declared
            self.merged = _required_wins(self.merged, directives.component_conflict or declared)
        self.merged = _required_wins(self.merged, record.required)

    def resolve(self) -> bool:
        if self.conflicting:
            return bool(self.last_declared)
        if self.merged is None:
            return DEFAULT_REQUIRED
        return self.merged


def _required_wins(current: Optional[bool], declared: Optional[bool]) -> Optional[bool]:
    if declared is None:
        return current
    if current is None:
        return declared
    return current or declared


class HierarchyBuilder:
    """Folds template records into parts and components in discovery order."""

    def __init__(self) -> None:
        self._parts: Dict[str, Dict[str, _ComponentState]] = {}
        self.logger = get_logger("hierarchy")

    def add(self, record: TemplateRecord) -> None:
        components = self._parts.setdefault(record.part_name, {})
        state = components.get(record.component_name)
        if state is None:
            self.logger.debug(
                "Registering component %s/%s", record.part_name, record.component_name
            )
            state = _ComponentState(name=record.component_name)
            components[record.component_name] = state
        state.fold(record)

    def finish(self) -> BuildResult:
        """Return the completed manifest and any conflicts found."""
        parts: List[PartEntry] = []
        conflicts: List[ComponentConflict] = []
        for part_name, components in self._parts.items():
            entries: List[ComponentEntry] = []
            for state in components.values():
                if state.conflicting:
                    conflicts.append(
                        ComponentConflict(
                            part=part_name,
                            component=state.name,
                            templates=tuple(
                                record.rel_path
                                for record in state.templates
                                if record.directives.component_required is not None
                            ),
                        )
                    )
                entries.append(_build_component(state))
            parts.append(PartEntry(name=part_name, components=tuple(entries)))
        return BuildResult(manifest=Manifest(parts=tuple(parts)), conflicts=conflicts)


def _build_component(state: _ComponentState) -> ComponentEntry:
    required_templates: List[str] = []
    optional_templates: List[str] = []
    for record in state.templates:
        required = record.required
        if required is None:
            required = DEFAULT_REQUIRED
        if required:
            required_templates.append(record.rel_path)
        else:
            optional_templates.append(record.rel_path)
    return ComponentEntry(
        name=state.name,
        required=state.resolve(),
        required_templates=tuple(required_templates),
        optional_templates=tuple(optional_templates),
    )


__all__ = ["DEFAULT_REQUIRED", "HierarchyBuilder"]
