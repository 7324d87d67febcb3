"""Walker for class directories on the classpath."""

from pathlib import Path

from loguru import logger

from javaimport.classfile import read_class_file, type_info_from_class_file
from javaimport.emitter import Emitter
from javaimport.errors import JavaImportError, WalkError
from javaimport.services.path_filter import PathFilter
from javaimport.walkers.base import WalkStats


class DirectoryWalker:
    """Emit every ``.class`` file below a classpath directory.

    Paths are filtered relative to the directory, so ``java/lang/String.class``
    under ``classes/`` is matched as ``java/lang/String.class``.
    """

    def __init__(self, directory: Path, path_filter: PathFilter, emitter: Emitter) -> None:
        self.directory = directory
        self.path_filter = path_filter
        self.emitter = emitter

    def walk(self) -> WalkStats:
        if not self.directory.is_dir():
            raise WalkError(f"Not a directory: {self.directory}", str(self.directory))

        stats = WalkStats()
        for file_path in sorted(self.directory.rglob("*.class")):
            if not file_path.is_file():
                continue

            relpath = file_path.relative_to(self.directory).as_posix()
            if not self.path_filter.apply(relpath):
                stats.filtered += 1
                continue

            try:
                class_file = read_class_file(file_path.read_bytes(), str(file_path))
                info = type_info_from_class_file(class_file)
            except (OSError, JavaImportError) as e:
                logger.warning("Can't parse classfile {}: {}", file_path, e)
                stats.failed += 1
                continue

            if info is not None:
                self.emitter.emit(info)
                stats.emitted += 1

        logger.debug(
            "Walked {}: emitted={} filtered={} failed={}",
            self.directory,
            stats.emitted,
            stats.filtered,
            stats.failed,
        )
        return stats
