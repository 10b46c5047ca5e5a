"""File metadata snapshots and the providers that produce them."""

import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class FileStat(BaseModel):
    """Metadata observed for an existing file.

    A missing file has no FileStat at all; providers return None instead.
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Path as declared by the node")
    mtime_ns: int = Field(..., description="Modification time in nanoseconds")
    size: int = Field(default=0, description="Size in bytes")


@runtime_checkable
class StatProvider(Protocol):
    """Anything that can look up file metadata by path."""

    def stat(self, path: str) -> FileStat | None:
        """Return metadata for path, or None if it cannot be resolved."""
        ...


class OSStatProvider:
    """Stat provider backed by os.stat.

    Every lookup failure (missing file, permission denied, invalid path)
    is reported as None. Callers cannot tell these cases apart.
    """

    def __init__(self, root: Path | None = None):
        """Initialize the provider.

        Args:
            root: Base directory for relative paths. Absolute paths are
                  used as given. Defaults to the process working directory.
        """
        self._root = root

    @property
    def root(self) -> Path | None:
        """Base directory for relative paths."""
        return self._root

    def resolve(self, path: str) -> str:
        """Map a declared path to the path handed to os.stat."""
        if self._root is None or os.path.isabs(path):
            return path
        return str(self._root / path)

    def stat(self, path: str) -> FileStat | None:
        try:
            result = os.stat(self.resolve(path))
        except (OSError, ValueError) as e:
            logger.debug(f"Treating {path} as missing: {e}")
            return None

        return FileStat(path=path, mtime_ns=result.st_mtime_ns, size=result.st_size)
