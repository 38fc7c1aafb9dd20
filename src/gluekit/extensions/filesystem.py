"""``context.filesystem``: small pathlib helpers rooted at a working directory."""
from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gluekit.runtime.context import RunContext


class Filesystem:
    """File helpers that resolve relative paths against ``cwd``."""

    def __init__(self, cwd: str | Path | None = None) -> None:
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()

    def path(self, *parts: str | Path) -> Path:
        return self.cwd.joinpath(*parts)

    def exists(self, target: str | Path) -> str | bool:
        """Return ``"file"``, ``"dir"`` or ``False``."""
        resolved = self.path(target)
        if resolved.is_file():
            return "file"
        if resolved.is_dir():
            return "dir"
        return False

    def read(self, target: str | Path) -> str | None:
        """Return the file's text, or ``None`` if it does not exist."""
        resolved = self.path(target)
        if not resolved.is_file():
            return None
        return resolved.read_text(encoding="utf-8")

    def write(self, target: str | Path, content: str) -> Path:
        """Write ``content``, creating parent directories as needed."""
        resolved = self.path(target)
        resolved.parent.mkdir(parents=True, exist_ok=True)
        resolved.write_text(content, encoding="utf-8")
        return resolved

    def list(self, target: str | Path = ".") -> list[str]:
        """Sorted entry names of a directory; empty if it does not exist."""
        resolved = self.path(target)
        if not resolved.is_dir():
            return []
        return sorted(entry.name for entry in resolved.iterdir())

    def remove(self, target: str | Path) -> None:
        """Delete a file or directory tree. Missing targets are ignored."""
        resolved = self.path(target)
        if resolved.is_dir():
            shutil.rmtree(resolved)
        elif resolved.exists():
            resolved.unlink()


def setup(context: RunContext) -> None:
    context.filesystem = Filesystem()
