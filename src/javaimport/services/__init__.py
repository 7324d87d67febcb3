"""javaimport services layer."""

from javaimport.services.path_filter import PathFilter, normalize_package

__all__ = ["PathFilter", "normalize_package"]
