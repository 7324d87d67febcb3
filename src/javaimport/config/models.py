"""Pydantic configuration models for javaimport."""

import os
from pathlib import Path
from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode


def _split_packages(value: str | list[str] | None) -> list[str]:
    """Split comma separated package lists and trim dots and spaces."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    packages: list[str] = []
    for item in value:
        packages.extend(pkg.strip(" .") for pkg in item.split(","))
    return packages


class FilterConfig(BaseModel):
    """Package filtering configuration."""

    # environment values reach the validator as raw strings
    excludes: Annotated[list[str], NoDecode] = Field(default_factory=list)
    includes: Annotated[list[str], NoDecode] = Field(default_factory=list)

    @field_validator("excludes", "includes", mode="before")
    @classmethod
    def split_packages(cls, v: str | list[str] | None) -> list[str]:
        """Accept comma separated strings as well as lists."""
        return _split_packages(v)


class ScanConfig(BaseModel):
    """Classpath and sourcepath configuration."""

    ARCHIVE_SUFFIXES: ClassVar[set[str]] = {".jar", ".zip"}

    classpath: Annotated[list[Path], NoDecode] = Field(default_factory=list)
    sourcepath: Annotated[list[Path], NoDecode] = Field(default_factory=list)

    @field_validator("classpath", "sourcepath", mode="before")
    @classmethod
    def split_search_path(cls, v: str | list[str | Path] | None) -> list[Path]:
        """Accept os.pathsep separated strings and expand user paths."""
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        paths: list[Path] = []
        for item in v:
            if isinstance(item, str):
                paths.extend(Path(p).expanduser() for p in item.split(os.pathsep) if p)
            else:
                paths.append(Path(item).expanduser())
        return paths


class LoggingConfig(BaseModel):
    """Logging configuration for loguru."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    format: Literal["console", "json"] = "console"
    file: Path | None = None
    rotation: str = "10 MB"
    retention: str = "7 days"


class Config(BaseSettings):
    """Root configuration for javaimport."""

    filter: FilterConfig = Field(default_factory=FilterConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "JAVAIMPORT_",
        "env_nested_delimiter": "__",
    }
