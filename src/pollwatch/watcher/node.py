"""Nodes: the objects a Watcher notifies when their files change."""

import logging
from collections.abc import Sequence
from typing import Callable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Node(Protocol):
    """A set of files that should be watched.

    A Watcher calls paths() on every scan to learn which files to check,
    and updated() once per scan in which any of them changed. The result
    of paths() may vary between scans but should stay the same between a
    scan and the updated() call it triggers.
    """

    def paths(self) -> Sequence[str]:
        """Return every path this node depends on."""
        ...

    def updated(self) -> Exception | None:
        """React to a change; return an exception to report a failure."""
        ...


class FileNode:
    """Node for a main file and the files it depends on.

    Example:
        node = FileNode("main.tmpl", deps=["header.tmpl", "footer.tmpl"],
                        on_update=lambda n: render(n.path))
        watcher.register(node)
    """

    def __init__(
        self,
        path: str,
        deps: Sequence[str] = (),
        on_update: Callable[["FileNode"], None] | None = None,
    ):
        """Initialize the node.

        Args:
            path: The main file
            deps: Files the main file depends on (imports, includes, ...)
            on_update: Called with this node whenever a change is detected
        """
        self.path = path
        self.deps = list(deps)
        self.update_count = 0
        self._on_update = on_update

    def paths(self) -> list[str]:
        return [*self.deps, self.path]

    def updated(self) -> Exception | None:
        self.update_count += 1
        if self._on_update is None:
            return None

        try:
            self._on_update(self)
        except Exception as e:
            logger.debug(f"Update callback for {self.path} failed: {e}")
            return e
        return None

    def __repr__(self) -> str:
        return f"FileNode(path={self.path!r}, deps={self.deps!r})"
