from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.reference_builder import ReferenceBuilder


@pytest.fixture
def reference_builder(tmp_path: Path) -> ReferenceBuilder:
    """Provide a reusable reference builder rooted at the pytest tmp_path."""
    return ReferenceBuilder(tmp_path)
