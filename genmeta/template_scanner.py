"""Reference directory walking and template discovery."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Sequence

from .config import CONFIG_FILENAME
from .logging import get_logger
from .models import TemplateRecord

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
    CONFIG_FILENAME,
}


@dataclass(frozen=True)
class ExcludeRule:
    """A glob that removes reference paths from discovery.

    ``drafts/`` only matches directories, ``/metadata.yml`` only matches at the
    reference root, and a pattern without a slash matches any path segment.
    """

    glob: str
    directories_only: bool = False
    whole_path: bool = False

    @classmethod
    def parse(cls, pattern: str) -> ExcludeRule | None:
        glob = pattern.strip()
        directories_only = glob.endswith("/")
        glob = glob.rstrip("/")
        whole_path = "/" in glob
        glob = glob.lstrip("/")
        if not glob:
            return None
        return cls(glob=glob, directories_only=directories_only, whole_path=whole_path)

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directories_only and not is_dir:
            return False
        if self.whole_path:
            return fnmatchcase(rel_path, self.glob)
        return any(fnmatchcase(segment, self.glob) for segment in rel_path.split("/"))


def _excluded(rel_path: str, is_dir: bool, rules: Sequence[ExcludeRule]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


class TemplateScanner:
    """Walks a reference directory and yields one record per template file.

    Directories and files are visited in lexical order so that discovery order,
    and therefore manifest order, is stable across runs and filesystems.
    """

    def __init__(
        self,
        exclude_paths: Iterable[str] = (),
        on_error: Optional[Callable[[OSError], None]] = None,
    ) -> None:
        self.rules: List[ExcludeRule] = [
            rule for rule in map(ExcludeRule.parse, exclude_paths) if rule
        ]
        self.on_error = on_error
        self.logger = get_logger("scanner")

    def scan(self, root: str | Path) -> List[TemplateRecord]:
        """Return template records for every file under ``root``."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Reference directory not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Reference path is not a directory: {root}")

        records = [
            TemplateRecord(path=str(path), rel_path=path.relative_to(root_path).as_posix())
            for path in self._iter_files(root_path)
        ]
        self.logger.debug("Discovered %d templates under %s", len(records), root_path)
        return records

    def _iter_files(self, root: Path) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root, onerror=self._handle_error):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept_dirs = []
            for name in sorted(dirnames):
                if name in _EXCLUDED_DIRS:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _excluded(rel_path, True, self.rules):
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for filename in sorted(filenames):
                if filename in _EXCLUDED_FILES:
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _excluded(rel_path, False, self.rules):
                    continue
                path = current_dir / filename
                if not path.is_file():
                    continue
                yield path

    def _handle_error(self, exc: OSError) -> None:
        if self.on_error is not None:
            self.on_error(exc)
        else:
            self.logger.warning("Error while walking reference directory: %s", exc)


__all__ = ["ExcludeRule", "TemplateScanner"]
