"""javaimport utility modules."""

from javaimport.utils.logging import configure_logging

__all__ = ["configure_logging"]
