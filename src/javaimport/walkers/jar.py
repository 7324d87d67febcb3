"""Walker for jar and zip archives on the classpath."""

import zipfile
import zlib
from pathlib import Path

from loguru import logger

from javaimport.classfile import read_class_file, type_info_from_class_file
from javaimport.emitter import Emitter
from javaimport.errors import JavaImportError, WalkError
from javaimport.services.path_filter import PathFilter
from javaimport.walkers.base import WalkStats


class JarWalker:
    """Emit every ``.class`` entry of a jar or zip archive."""

    def __init__(self, filename: Path, path_filter: PathFilter, emitter: Emitter) -> None:
        self.filename = filename
        self.path_filter = path_filter
        self.emitter = emitter

    def walk(self) -> WalkStats:
        try:
            archive = zipfile.ZipFile(self.filename)
        except (OSError, zipfile.BadZipFile) as e:
            raise WalkError(f"Can't open archive {self.filename}: {e}", str(self.filename)) from e

        stats = WalkStats()
        with archive:
            for entry in archive.infolist():
                if entry.is_dir() or not entry.filename.endswith(".class"):
                    continue

                if not self.path_filter.apply(entry.filename):
                    stats.filtered += 1
                    continue

                location = f"{self.filename}:{entry.filename}"
                try:
                    data = archive.read(entry)
                    info = type_info_from_class_file(read_class_file(data, location))
                except (OSError, zipfile.BadZipFile, zlib.error, JavaImportError) as e:
                    logger.warning("Can't parse classfile {}: {}", location, e)
                    stats.failed += 1
                    continue

                if info is not None:
                    self.emitter.emit(info)
                    stats.emitted += 1

        logger.debug(
            "Walked {}: emitted={} filtered={} failed={}",
            self.filename,
            stats.emitted,
            stats.filtered,
            stats.failed,
        )
        return stats
