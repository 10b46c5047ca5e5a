"""Polling change detection for nodes that depend on files.

A Watcher keeps the last modification time seen for every path declared by
its registered nodes. Each call to scan() stats those paths again, and every
node that declared a changed path is notified exactly once.
"""

import logging
from dataclasses import dataclass, field
from typing import NamedTuple

from .node import Node
from .stat import FileStat, OSStatProvider, StatProvider

logger = logging.getLogger(__name__)


class ScanResult(NamedTuple):
    """Outcome of Watcher.scan()."""

    changed: bool
    errors: list[Exception]


@dataclass
class PathRecord:
    """Last known state of one path and the nodes currently watching it."""

    stat: FileStat | None = None
    visited: bool = False
    updated: bool = False
    nodes: dict[int, Node] = field(default_factory=dict)


def _notify(node: Node) -> Exception | None:
    """Call node.updated(), turning a raised exception into a returned one."""
    try:
        return node.updated()
    except Exception as e:
        return e


class Watcher:
    """Notifies registered nodes when the files they reference change.

    Nodes are keyed by identity, so a node's own __eq__ and __hash__ are
    never consulted. The first scan only records a baseline: existing files
    do not trigger updates until they are modified. A path that was declared
    in an earlier scan while missing does trigger an update once it appears.

    Watcher does no locking. Callers sharing one across threads must
    serialize calls to register(), unregister() and scan().
    """

    def __init__(self, provider: StatProvider | None = None):
        """Initialize the watcher.

        Args:
            provider: Source of file metadata (default: OSStatProvider())
        """
        self._provider = provider if provider is not None else OSStatProvider()
        self._nodes: dict[int, Node] = {}
        self._paths: dict[str, PathRecord] = {}

    @property
    def provider(self) -> StatProvider:
        """The metadata provider used by scan()."""
        return self._provider

    @property
    def watched_paths(self) -> list[str]:
        """Paths declared during the most recent scan."""
        return sorted(self._paths)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        return id(node) in self._nodes

    def is_empty(self) -> bool:
        """Check if the watcher is not observing any nodes."""
        return not self._nodes

    def register(self, node: Node) -> None:
        """Observe node on subsequent scans. Registering twice is a no-op."""
        if id(node) in self._nodes:
            return
        self._nodes[id(node)] = node
        logger.debug(f"Registered {node!r}")

    def unregister(self, node: Node) -> None:
        """Stop observing node. Its paths are dropped on the next scan."""
        if self._nodes.pop(id(node), None) is not None:
            logger.debug(f"Unregistered {node!r}")

    def update_all(self) -> list[Exception]:
        """Call updated() on every registered node.

        The path index is left alone, so a following scan() may still
        report changes.

        Returns:
            Failures reported by the nodes
        """
        return self._notify_all(list(self._nodes.values()))

    def scan(self) -> ScanResult:
        """Check every declared path and notify nodes whose files changed.

        Returns:
            ScanResult with whether any node was notified, and the failures
            those nodes reported
        """
        # Collect every declaration before touching the index so a failing
        # paths() leaves the stored stats untouched.
        declared = [(key, node, list(node.paths())) for key, node in self._nodes.items()]

        for record in self._paths.values():
            record.visited = False
            record.updated = False

        for key, node, paths in declared:
            for path in paths:
                self._visit(path, key, node)

        updated_nodes: dict[int, Node] = {}
        for path, record in list(self._paths.items()):
            if not record.visited:
                del self._paths[path]
                continue
            if record.updated:
                logger.debug(f"Detected change: {path}")
                updated_nodes.update(record.nodes)

        logger.debug(
            f"Scanned {len(self._paths)} paths for {len(self._nodes)} nodes, "
            f"{len(updated_nodes)} updated"
        )

        errors = self._notify_all(list(updated_nodes.values()))
        return ScanResult(bool(updated_nodes), errors)

    def _visit(self, path: str, key: int, node: Node) -> None:
        """Refresh one path on behalf of node during a scan."""
        record = self._paths.get(path)
        existed_already = record is not None
        if record is None:
            record = PathRecord()
            self._paths[path] = record

        if record.visited:
            record.nodes[key] = node
            return

        record.visited = True
        record.nodes = {key: node}

        try:
            stat = self._provider.stat(path)
        except (OSError, ValueError) as e:
            logger.debug(f"Treating {path} as missing: {e}")
            stat = None

        if stat is not None:
            if record.stat is not None:
                if record.stat.mtime_ns != stat.mtime_ns:
                    record.updated = True
            elif existed_already:
                record.updated = True
        record.stat = stat

    def _notify_all(self, nodes: list[Node]) -> list[Exception]:
        errors: list[Exception] = []
        for node in nodes:
            error = _notify(node)
            if error is not None:
                logger.warning(f"Node {node!r} failed to update: {error}")
                errors.append(error)
        return errors
