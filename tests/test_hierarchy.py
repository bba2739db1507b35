"""Tests for genmeta.hierarchy."""

from __future__ import annotations

from genmeta.directives import parse_directives
from genmeta.hierarchy import HierarchyBuilder
from genmeta.models import TemplateRecord


def _record(rel_path: str, part: str, component: str, text: str = "") -> TemplateRecord:
    return TemplateRecord(
        path=f"/ref/{rel_path}",
        rel_path=rel_path,
        directives=parse_directives(text),
        part_name=part,
        component_name=component,
    )


def test_builder_defaults_to_required_when_nothing_declared() -> None:
    builder = HierarchyBuilder()
    builder.add(_record("p/c/a.yaml", "p", "c"))
    builder.add(_record("p/c/b.yaml", "p", "c"))

    result = builder.finish()

    component = result.manifest.find_component("p", "c")
    assert component is not None
    assert component.required is True
    assert component.required_templates == ("p/c/a.yaml", "p/c/b.yaml")
    assert component.optional_templates == ()
    assert result.conflicts == []


def test_builder_component_optional_when_only_optional_declared() -> None:
    builder = HierarchyBuilder()
    builder.add(_record("p/c/a.yaml", "p", "c", "# cluster-compare-optional\n"))
    builder.add(_record("p/c/b.yaml", "p", "c", "# cluster-compare-optional\n"))

    component = builder.finish().manifest.find_component("p", "c")

    assert component is not None
    assert component.required is False
    assert component.optional_templates == ("p/c/a.yaml", "p/c/b.yaml")


def test_builder_required_wins_over_optional_templates() -> None:
    builder = HierarchyBuilder()
    builder.add(_record("p/c/a.yaml", "p", "c", "# cluster-compare-optional\n"))
    builder.add(_record("p/c/b.yaml", "p", "c", "# cluster-compare-required\n"))

    result = builder.finish()
    component = result.manifest.find_component("p", "c")

    assert component is not None
    assert component.required is True
    assert component.required_templates == ("p/c/b.yaml",)
    assert component.optional_templates == ("p/c/a.yaml",)
    assert result.conflicts == []


def test_builder_component_directive_required_wins_over_optional_templates() -> None:
    builder = HierarchyBuilder()
    builder.add(_record("p/c/a.yaml", "p", "c", "# cluster-compare-optional\n"))
    builder.add(_record("p/c/b.yaml", "p", "c", "# cluster-compare-component-required\n"))

    component = builder.finish().manifest.find_component("p", "c")

    assert component is not None
    assert component.required is True


def test_builder_component_optional_directive_keeps_unspecified_templates_required() -> None:
    builder = HierarchyBuilder()
    builder.add(_record("p/c/a.yaml", "p", "c", "# cluster-compare-component-optional\n"))
    builder.add(_record("p/c/b.yaml", "p", "c"))

    component = builder.finish().manifest.find_component("p", "c")

    assert component is not None
    assert component.required is False
    assert component.required_templates == ("p/c/a.yaml", "p/c/b.yaml")


def test_builder_reports_component_conflict_and_uses_last_declaration() -> None:
    builder = HierarchyBuilder()
    builder.add(_record("p/c/a.yaml", "p", "c", "# cluster-compare-component-required\n"))
    builder.add(_record("p/c/b.yaml", "p", "c"))
    builder.add(_record("p/c/c.yaml", "p", "c", "# cluster-compare-component-optional\n"))

    result = builder.finish()

    assert len(result.conflicts) == 1
    conflict = result.conflicts[0]
    assert (conflict.part, conflict.component) == ("p", "c")
    assert conflict.templates == ("p/c/a.yaml", "p/c/c.yaml")
    assert "conflicting component required status" in conflict.message
    component = result.manifest.find_component("p", "c")
    assert component is not None
    assert component.required is False


def test_builder_conflict_inside_single_template() -> None:
    builder = HierarchyBuilder()
    builder.add(
        _record(
            "p/c/a.yaml",
            "p",
            "c",
            "# cluster-compare-component-optional\n# cluster-compare-component-required\n",
        )
    )

    result = builder.finish()

    assert len(result.conflicts) == 1
    component = result.manifest.find_component("p", "c")
    assert component is not None
    assert component.required is True


def test_builder_keeps_first_discovery_order() -> None:
    builder = HierarchyBuilder()
    builder.add(_record("z/y/a.yaml", "zeta", "y"))
    builder.add(_record("a/b/a.yaml", "alpha", "b"))
    builder.add(_record("z/a/a.yaml", "zeta", "a"))
    builder.add(_record("z/y/b.yaml", "zeta", "y"))

    manifest = builder.finish().manifest

    assert [part.name for part in manifest.parts] == ["zeta", "alpha"]
    assert [entry.name for entry in manifest.parts[0].components] == ["y", "a"]
    assert manifest.parts[0].components[0].required_templates == ("z/y/a.yaml", "z/y/b.yaml")


def test_builder_merges_same_component_across_directories() -> None:
    builder = HierarchyBuilder()
    builder.add(_record("one/x/a.yaml", "shared", "combined"))
    builder.add(_record("two/y/b.yaml", "shared", "combined"))

    manifest = builder.finish().manifest

    assert len(manifest.parts) == 1
    assert len(manifest.parts[0].components) == 1
    assert manifest.parts[0].components[0].required_templates == ("one/x/a.yaml", "two/y/b.yaml")


def test_builder_same_component_name_in_different_parts_stays_separate() -> None:
    builder = HierarchyBuilder()
    builder.add(_record("a/c/a.yaml", "a", "c", "# cluster-compare-component-required\n"))
    builder.add(_record("b/c/a.yaml", "b", "c", "# cluster-compare-component-optional\n"))

    result = builder.finish()

    assert result.conflicts == []
    assert result.manifest.find_component("a", "c").required is True
    assert result.manifest.find_component("b", "c").required is False
