"""Package exclude/include filtering for scanned paths.

Decides whether a class or source file found on the classpath should
be parsed, based on dotted package prefixes from user configuration.
"""

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from loguru import logger

from javaimport.errors import CompilationFailed
from javaimport.matching.trie import TrieCompiler

if TYPE_CHECKING:
    from javaimport.config.models import FilterConfig

# Anonymous classes compile to Outer$1.class.
SYNTHETIC_CLASS_CLAUSE = r".*\$[0-9]+\.class\Z"


def normalize_package(package: str) -> str:
    """Turn a dotted package name into a slash-terminated path prefix.

    Args:
        package: Dotted package name, e.g. ``java.lang``.

    Returns:
        Path prefix, e.g. ``java/lang/``.
    """
    return package.replace(".", "/") + "/"


def _compile_prefixes(packages: Iterable[str]) -> TrieCompiler:
    compiler = TrieCompiler()
    for package in packages:
        prefix = normalize_package(package)
        if prefix == "/":
            continue
        compiler.add(prefix)
    return compiler


class PathFilter:
    """Two-tier package filter for classpath entries.

    A path is rejected only when it falls under an excluded package and
    not under an included one. The include list never rejects by itself;
    it can only carve exceptions out of the exclude list. Compiler
    generated ``$<digits>.class`` files are always treated as excluded.

    Instances hold only compiled patterns and may be shared freely
    between threads.
    """

    def __init__(self, excludes: Iterable[str], includes: Iterable[str]) -> None:
        """Compile exclude and include package sets.

        Args:
            excludes: Dotted package names to skip.
            includes: Dotted package names that override excludes.

        Raises:
            CompilationFailed: If a synthesized pattern is rejected.
        """
        exclude_text = _compile_prefixes(excludes).pattern_text()
        self._exclude_text = f"^(?:{exclude_text}|{SYNTHETIC_CLASS_CLAUSE})"
        try:
            self._exclude = re.compile(self._exclude_text)
        except re.error as e:
            raise CompilationFailed(
                f"Invalid exclude pattern: {e}", self._exclude_text
            ) from e

        include_compiler = _compile_prefixes(includes)
        self._include_text = include_compiler.pattern_text()
        self._include = include_compiler.compile()

        logger.debug(
            "Path filter compiled: exclude={} include={}",
            self._exclude_text,
            self._include_text,
        )

    @classmethod
    def from_config(cls, config: "FilterConfig") -> "PathFilter":
        """Build a filter from FilterConfig."""
        return cls(config.excludes, config.includes)

    @property
    def exclude_pattern_text(self) -> str:
        """Full exclude pattern, including the synthetic class clause."""
        return self._exclude_text

    @property
    def include_pattern_text(self) -> str:
        """Include pattern text."""
        return self._include_text

    def apply(self, path: str) -> bool:
        """Decide whether a path should be processed.

        Args:
            path: Slash-separated path relative to its classpath root.

        Returns:
            True to keep the path, False to skip it.
        """
        if self._exclude.match(path) is None:
            return True
        return self._include.match(path) is not None
