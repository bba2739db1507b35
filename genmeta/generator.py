"""Metadata generation pipeline for a reference directory."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .directives import parse_directives
from .emitter import OPTIONAL, REQUIRED, dump_manifest
from .hierarchy import HierarchyBuilder
from .logging import LoggingSink, ReportSink, get_logger
from .models import Manifest
from .naming import resolve_names
from .template_scanner import TemplateScanner

logger = get_logger("generator")


@dataclass
class GenerationResult:
    """Outcome of a generation run."""

    manifest: Optional[Manifest] = None
    output: str = ""
    errors: List[str] = field(default_factory=list)
    fatal: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.fatal is None and not self.errors


class _Reporter:
    """Forwards reports to the sink while keeping a copy for the result."""

    def __init__(self, sink: ReportSink, result: GenerationResult) -> None:
        self.sink = sink
        self.result = result

    def error(self, message: str) -> None:
        self.result.errors.append(message)
        self.sink.error(message)

    def fatal(self, message: str) -> GenerationResult:
        self.result.fatal = message
        self.result.manifest = None
        self.result.output = ""
        self.sink.fatal(message)
        return self.result


def generate_metadata(
    reference_dir: str | Path,
    *,
    exit_on_error: bool = False,
    sink: ReportSink | None = None,
    exclude_paths: Iterable[str] = (),
    scanner: TemplateScanner | None = None,
) -> GenerationResult:
    """Build the metadata manifest for every template under ``reference_dir``.

    Problems are reported to ``sink``. A result whose ``fatal`` is set must be
    treated by the caller as a failed run; otherwise ``output`` holds the
    rendered manifest, possibly best-effort when ``errors`` is non-empty.
    ``scanner`` replaces the default discovery; its ``on_error`` callback is
    taken over for the run.
    """
    result = GenerationResult()
    reporter = _Reporter(sink or LoggingSink(), result)

    walk_errors: List[OSError] = []
    if scanner is None:
        scanner = TemplateScanner(exclude_paths=exclude_paths)
    scanner.on_error = walk_errors.append
    try:
        records = scanner.scan(reference_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        return reporter.fatal(str(exc))

    for exc in walk_errors:
        reporter.error(f"error while walking directory structure: {exc}")
    if walk_errors and exit_on_error:
        return reporter.fatal(f"error while gathering templates: {walk_errors[0]}")

    if not records:
        return reporter.fatal(f"no templates found in {reference_dir}")

    builder = HierarchyBuilder()
    for record in records:
        try:
            text = Path(record.path).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            return reporter.fatal(f"failed to read template {record.rel_path}: {exc}")

        record.directives = parse_directives(text)
        for problem in record.directives.problems:
            reporter.error(f"{problem} in template {record.rel_path}")
        record.part_name, record.component_name = resolve_names(
            record.path,
            record.directives.part_name,
            record.directives.component_name,
        )
        builder.add(record)

    build = builder.finish()
    for conflict in build.conflicts:
        entry = build.manifest.find_component(conflict.part, conflict.component)
        resolved = REQUIRED if entry is not None and entry.required else OPTIONAL
        reporter.error(f"{conflict.message}; using last declaration ({resolved})")
    if build.conflicts and exit_on_error:
        details = "\n".join(conflict.message for conflict in build.conflicts)
        return reporter.fatal(f"failed to generate valid metadata file: {details}")

    result.manifest = build.manifest
    result.output = dump_manifest(build.manifest)
    logger.info(
        "Generated metadata for %d templates in %d parts",
        len(records),
        len(build.manifest.parts),
    )
    return result


def output_exclusion(reference_dir: str | Path, output: str | Path) -> Optional[str]:
    """Return an anchored exclude pattern when ``output`` lives inside the reference."""
    if str(output) == "-":
        return None
    reference = Path(reference_dir).expanduser().resolve()
    target = Path(output).expanduser().resolve()
    try:
        rel_path = target.relative_to(reference)
    except ValueError:
        return None
    return f"/{rel_path.as_posix()}"


def write_manifest(result: GenerationResult, output: str | Path) -> Optional[Path]:
    """Write rendered output to ``output``; ``"-"`` means stdout."""
    if str(output) == "-":
        sys.stdout.write(result.output)
        sys.stdout.flush()
        return None
    target = Path(output).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(result.output, encoding="utf-8")
    return target


__all__ = ["GenerationResult", "generate_metadata", "output_exclusion", "write_manifest"]
