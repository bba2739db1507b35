"""Helper utilities for constructing temporary reference trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from genmeta.generator import GenerationResult, generate_metadata
from genmeta.logging import RecordingSink


class ReferenceBuilder:
    """Utility for writing templates into a throwaway reference and generating metadata."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "reference"
        self.root.mkdir()
        self.sink = RecordingSink()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the reference."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def generate(self, *, exit_on_error: bool = False) -> GenerationResult:
        """Return a fresh generation result for the reference contents."""
        return generate_metadata(self.root, exit_on_error=exit_on_error, sink=self.sink)

    def path(self) -> Path:
        """Return the reference root path."""
        return self.root


__all__ = ["ReferenceBuilder"]
