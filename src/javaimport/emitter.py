"""Output of index records."""

import threading
from typing import Protocol, TextIO, runtime_checkable

from javaimport.models.type_info import TypeInfo


@runtime_checkable
class Emitter(Protocol):
    """Sink for index records produced by walkers."""

    def emit(self, info: TypeInfo | None) -> None:
        """Record one type; None is ignored."""
        ...


class JsonLinesEmitter:
    """Write one JSON object per line.

    Walkers run on several threads at once, so writes are serialized
    with a lock to keep lines intact.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._lock = threading.Lock()
        self.count = 0

    def emit(self, info: TypeInfo | None) -> None:
        if info is None:
            return
        line = info.to_json()
        with self._lock:
            self._stream.write(line + "\n")
            self.count += 1

    def flush(self) -> None:
        with self._lock:
            self._stream.flush()
