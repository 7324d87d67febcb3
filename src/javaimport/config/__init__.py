"""Configuration management for javaimport."""

from javaimport.config.loader import load_config
from javaimport.config.models import Config, FilterConfig, LoggingConfig, ScanConfig

__all__ = ["Config", "FilterConfig", "LoggingConfig", "ScanConfig", "load_config"]
