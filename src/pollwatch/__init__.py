"""Polling change detection for files that depend on other files."""

from .config import Settings, setup_logging
from .watcher import (
    FileNode,
    FileStat,
    Node,
    OSStatProvider,
    PollingWatcher,
    ScanResult,
    StatProvider,
    Watcher,
)

__all__ = [
    "FileNode",
    "FileStat",
    "Node",
    "OSStatProvider",
    "PollingWatcher",
    "ScanResult",
    "Settings",
    "StatProvider",
    "Watcher",
    "setup_logging",
]
