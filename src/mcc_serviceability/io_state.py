"""Persistence helpers for session state strings."""

from __future__ import annotations

from pathlib import Path


def read_state(path: str) -> str | None:
    """Return the saved state string, or None when nothing has been saved."""
    state_path = Path(path)
    if not state_path.exists():
        return None
    content = state_path.read_text(encoding="utf-8").strip()
    return content or None


def write_state(path: str, state: str) -> None:
    """Write a state string, creating parent directories as needed."""
    state_path = Path(path)
    state_path.parent.mkdir(parents=True, exist_ok=True)
    state_path.write_text(state + "\n" if state else "", encoding="utf-8")
