"""Classpath and sourcepath walkers."""

from pathlib import Path

from javaimport.config.models import ScanConfig
from javaimport.emitter import Emitter
from javaimport.services.path_filter import PathFilter
from javaimport.walkers.base import WalkerProtocol, WalkStats
from javaimport.walkers.directory import DirectoryWalker
from javaimport.walkers.jar import JarWalker
from javaimport.walkers.source import SourceWalker


def walker_for_classpath(
    path: Path, path_filter: PathFilter, emitter: Emitter
) -> DirectoryWalker | JarWalker:
    """Pick the walker for a classpath entry by its suffix."""
    if path.suffix.lower() in ScanConfig.ARCHIVE_SUFFIXES:
        return JarWalker(path, path_filter, emitter)
    return DirectoryWalker(path, path_filter, emitter)


__all__ = [
    "DirectoryWalker",
    "JarWalker",
    "SourceWalker",
    "WalkStats",
    "WalkerProtocol",
    "walker_for_classpath",
]
