"""Concurrent scanning of classpath and sourcepath entries.

Each entry gets its own walker running on a worker thread. All walkers
share one PathFilter and one emitter.
"""

import asyncio
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from javaimport.emitter import Emitter
from javaimport.services.path_filter import PathFilter
from javaimport.walkers import SourceWalker, WalkerProtocol, WalkStats, walker_for_classpath


@dataclass
class ScanStats:
    """Aggregated result of a scan."""

    totals: WalkStats = field(default_factory=WalkStats)
    errors: dict[str, str] = field(default_factory=dict)
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.errors


class ClasspathScanner:
    """Walk classpath and sourcepath entries concurrently.

    Attributes:
        path_filter: Filter consulted before parsing each file
        emitter: Sink for emitted types
    """

    def __init__(self, path_filter: PathFilter, emitter: Emitter) -> None:
        self.path_filter = path_filter
        self.emitter = emitter

    def _walkers(
        self, classpath: Sequence[Path], sourcepath: Sequence[Path]
    ) -> list[tuple[Path, WalkerProtocol]]:
        walkers: list[tuple[Path, WalkerProtocol]] = [
            (path, SourceWalker(path, self.path_filter, self.emitter)) for path in sourcepath
        ]
        walkers.extend(
            (path, walker_for_classpath(path, self.path_filter, self.emitter))
            for path in classpath
        )
        return walkers

    async def scan(
        self, classpath: Sequence[Path], sourcepath: Sequence[Path] = ()
    ) -> ScanStats:
        """Walk every entry and collect statistics.

        A failing entry is logged and recorded in ScanStats.errors; it
        does not cancel the other walks.

        Args:
            classpath: Class directories and jar/zip archives.
            sourcepath: Java source directories.

        Returns:
            Aggregated ScanStats.
        """
        started_at = time.perf_counter()
        walkers = self._walkers(classpath, sourcepath)

        results = await asyncio.gather(
            *(asyncio.to_thread(walker.walk) for _, walker in walkers),
            return_exceptions=True,
        )

        stats = ScanStats()
        for (path, _), result in zip(walkers, results, strict=True):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.error("Error walking with {}: {}", path, result)
                stats.errors[str(path)] = str(result)
            else:
                stats.totals += result

        stats.elapsed_seconds = time.perf_counter() - started_at
        logger.debug("time required: {:.3f}s", stats.elapsed_seconds)
        return stats
