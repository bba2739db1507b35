"""Core data models shared across genmeta components."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class Directives:
    """Directive comments found in a single template."""

    part_name: Optional[str] = None
    component_name: Optional[str] = None
    component_declarations: List[bool] = field(default_factory=list)
    template_declarations: List[bool] = field(default_factory=list)
    problems: List[str] = field(default_factory=list)

    @property
    def component_required(self) -> Optional[bool]:
        """Last explicit component-level declaration, if any."""
        if not self.component_declarations:
            return None
        return self.component_declarations[-1]

    @property
    def component_conflict(self) -> bool:
        return len(set(self.component_declarations)) > 1

    @property
    def required(self) -> Optional[bool]:
        if not self.template_declarations:
            return None
        # required wins when a template declares both
        return any(self.template_declarations)


@dataclass
class TemplateRecord:
    """One discovered template file."""

    path: str
    rel_path: str
    directives: Directives = field(default_factory=Directives)
    part_name: str = ""
    component_name: str = ""

    @property
    def required(self) -> Optional[bool]:
        return self.directives.required


@dataclass(frozen=True)
class ComponentEntry:
    """A component in the emitted manifest."""

    name: str
    required: bool
    required_templates: Tuple[str, ...] = ()
    optional_templates: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PartEntry:
    """A part in the emitted manifest."""

    name: str
    components: Tuple[ComponentEntry, ...] = ()


@dataclass(frozen=True)
class Manifest:
    """Root of the metadata hierarchy."""

    parts: Tuple[PartEntry, ...] = ()

    def find_component(self, part: str, component: str) -> Optional[ComponentEntry]:
        for part_entry in self.parts:
            if part_entry.name != part:
                continue
            for entry in part_entry.components:
                if entry.name == component:
                    return entry
        return None


@dataclass(frozen=True)
class ComponentConflict:
    """Contradictory component-level required/optional declarations."""

    part: str
    component: str
    templates: Tuple[str, ...]

    @property
    def message(self) -> str:
        return (
            f"conflicting component required status for component {self.component!r} "
            f"in part {self.part!r} (templates: {', '.join(self.templates)})"
        )


@dataclass
class BuildResult:
    """Finished hierarchy plus any conflicts detected while building it."""

    manifest: Manifest
    conflicts: List[ComponentConflict] = field(default_factory=list)
