"""Watcher module for polling-based file change detection."""

from .engine import PathRecord, ScanResult, Watcher
from .node import FileNode, Node
from .poller import PollingWatcher
from .stat import FileStat, OSStatProvider, StatProvider

__all__ = [
    "FileNode",
    "FileStat",
    "Node",
    "OSStatProvider",
    "PathRecord",
    "PollingWatcher",
    "ScanResult",
    "StatProvider",
    "Watcher",
]
