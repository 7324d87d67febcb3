"""Base walker types."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass
class WalkStats:
    """Counters collected while walking one classpath entry.

    Attributes:
        emitted: Types handed to the emitter.
        filtered: Files rejected by the path filter.
        failed: Files that could not be read or parsed.
    """

    emitted: int = 0
    filtered: int = 0
    failed: int = 0

    def __iadd__(self, other: "WalkStats") -> "WalkStats":
        self.emitted += other.emitted
        self.filtered += other.filtered
        self.failed += other.failed
        return self


@runtime_checkable
class WalkerProtocol(Protocol):
    """Contract for classpath and sourcepath walkers."""

    def walk(self) -> WalkStats:
        """
        Visit every candidate file, emitting the ones the filter keeps.

        Returns:
            Counters for the walk.

        Raises:
            WalkError: If the entry itself cannot be opened.
        """
        ...
