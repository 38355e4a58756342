from __future__ import annotations

import pytest

from component_tagger.models import FileContext


@pytest.fixture
def file_context() -> FileContext:
    """Provide a fresh per-file context for a component under src/pages."""
    return FileContext(file_path="src/pages/Foo.tsx")
