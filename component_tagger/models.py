"""Per-file state shared by the locator and the injector."""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class FileContext:
    """State for tagging a single source file.

    Marked opening tags are keyed by identity. The context keeps a reference to
    every marked node so the ids stay unique while the file is processed.
    """

    file_path: str
    _marked: Dict[int, Dict[str, Any]] = field(default_factory=dict, repr=False)

    def mark(self, opening_element: Dict[str, Any]) -> None:
        """Record an opening tag as topmost. Marks are never removed."""
        self._marked.setdefault(id(opening_element), opening_element)

    def is_marked(self, opening_element: Dict[str, Any]) -> bool:
        return id(opening_element) in self._marked

    def __len__(self) -> int:
        return len(self._marked)
