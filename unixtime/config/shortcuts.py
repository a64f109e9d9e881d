"""Named timezone presets shown as quick-select buttons."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Shortcut:
    label: str
    region: str
    city: Optional[str] = None


_SHORTCUTS: tuple[Shortcut, ...] = (
    Shortcut("UTC", "UTC"),
    Shortcut("PST", "America", "Los_Angeles"),
    Shortcut("MST", "America", "Denver"),
    Shortcut("CST", "America", "Chicago"),
    Shortcut("EST", "America", "New_York"),
)


def iter_shortcuts() -> list[Shortcut]:
    return list(_SHORTCUTS)


def get_shortcut(label: str) -> Optional[Shortcut]:
    wanted = label.strip().upper()
    for shortcut in _SHORTCUTS:
        if shortcut.label == wanted:
            return shortcut
    return None
