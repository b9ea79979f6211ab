"""Files visited while walking a project tree."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional


@dataclass(frozen=True)
class FileData:
    """A file on disk together with its paths relative to root and module.

    Attributes:
        system_path: Location on disk.
        path_within_root: Path relative to the analyzed root directory.
        path_within_module: Path relative to the Gradle project owning the
            file; just the file name when no project owns it.
        size: Size in bytes.
    """

    system_path: Path
    path_within_root: PurePosixPath
    path_within_module: PurePosixPath
    size: int

    @classmethod
    def from_path(
        cls, path: Path, root: Path, module_dir: Optional[Path] = None
    ) -> "FileData":
        within_module = (
            path.relative_to(module_dir) if module_dir is not None else Path(path.name)
        )
        return cls(
            system_path=path,
            path_within_root=PurePosixPath(path.relative_to(root).as_posix()),
            path_within_module=PurePosixPath(within_module.as_posix()),
            size=path.stat().st_size,
        )

    @property
    def extension(self) -> str:
        """Lowercase extension without the dot, or an empty string."""
        return self.path_within_root.suffix.lstrip(".").lower()


__all__ = ["FileData"]
