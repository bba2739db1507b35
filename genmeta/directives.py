"""Directive comment parsing for reference templates."""

from __future__ import annotations

import re

from .models import Directives

PART_DIRECTIVE = "cluster-compare-part"
COMPONENT_DIRECTIVE = "cluster-compare-component"
COMPONENT_REQUIRED_DIRECTIVE = "cluster-compare-component-required"
COMPONENT_OPTIONAL_DIRECTIVE = "cluster-compare-component-optional"
REQUIRED_DIRECTIVE = "cluster-compare-required"
OPTIONAL_DIRECTIVE = "cluster-compare-optional"

_NAME_PATTERN = re.compile(
    r"^\s*#\s+(?P<key>cluster-compare-(?:part|component)):(?P<value>.*)$"
)
_FLAG_PATTERN = re.compile(r"^\s*#\s+(?P<key>cluster-compare-[a-z-]+)\s*$")

_COMPONENT_FLAGS = {
    COMPONENT_REQUIRED_DIRECTIVE: True,
    COMPONENT_OPTIONAL_DIRECTIVE: False,
}
_TEMPLATE_FLAGS = {
    REQUIRED_DIRECTIVE: True,
    OPTIONAL_DIRECTIVE: False,
}


def parse_directives(text: str) -> Directives:
    """Return the directives declared in a template's text."""
    result = Directives()
    for line in text.splitlines():
        name_match = _NAME_PATTERN.match(line)
        if name_match:
            _apply_name(result, name_match.group("key"), name_match.group("value").strip())
            continue

        flag_match = _FLAG_PATTERN.match(line)
        if not flag_match:
            continue
        key = flag_match.group("key")
        if key in _COMPONENT_FLAGS:
            result.component_declarations.append(_COMPONENT_FLAGS[key])
        elif key in _TEMPLATE_FLAGS:
            result.template_declarations.append(_TEMPLATE_FLAGS[key])

    if len(set(result.template_declarations)) > 1:
        result.problems.append(
            "found both required and optional template comments; treating template as required"
        )
    return result


def _apply_name(result: Directives, key: str, value: str) -> None:
    if not value:
        return
    attr = "part_name" if key == PART_DIRECTIVE else "component_name"
    current = getattr(result, attr)
    if current is None:
        setattr(result, attr, value)
    elif current != value:
        result.problems.append(
            f"found conflicting {key} comments ({current!r} and {value!r}); using {current!r}"
        )


__all__ = [
    "COMPONENT_DIRECTIVE",
    "COMPONENT_OPTIONAL_DIRECTIVE",
    "COMPONENT_REQUIRED_DIRECTIVE",
    "OPTIONAL_DIRECTIVE",
    "PART_DIRECTIVE",
    "REQUIRED_DIRECTIVE",
    "parse_directives",
]
