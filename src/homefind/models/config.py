"""
Configuration data models for homefind.

This module defines the data structures for the optional configuration file:
indexer progress reporting, search limits, terminal layout and logging.
The location of the cached index is deliberately not part of the configuration.
"""

from typing import Dict, List, Any
from enum import Enum
import logging
from pydantic import BaseModel, ConfigDict, Field, field_validator


MAX_SEARCH_RESULTS = 1000


class LogLevel(Enum):
    """Supported logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class IndexerConfig(BaseModel):
    """
    Configuration for building the file index.

    Attributes:
        progress_interval: Report progress every this many indexed files
    """

    model_config = ConfigDict(extra='forbid')

    progress_interval: int = Field(10000, gt=0, description="Report progress every N indexed files")


class SearchConfig(BaseModel):
    """
    Configuration for query matching.

    Attributes:
        max_results: Maximum number of matches collected per query
    """

    model_config = ConfigDict(extra='forbid')

    max_results: int = Field(
        MAX_SEARCH_RESULTS, gt=0, le=MAX_SEARCH_RESULTS,
        description="Maximum number of matches collected per query"
    )


class UIConfig(BaseModel):
    """
    Configuration for the terminal front-end.

    Attributes:
        initial_window_size: Rows of matches shown before the terminal size is known
        reserved_rows: Rows taken by the header and footer around the match list
    """

    model_config = ConfigDict(extra='forbid')

    initial_window_size: int = Field(15, gt=0, description="Rows of matches shown before the first resize")
    reserved_rows: int = Field(5, ge=0, description="Rows reserved for header and footer")


class LoggingConfig(BaseModel):
    """Configuration for diagnostic logging."""

    model_config = ConfigDict(extra='forbid')

    level: LogLevel = Field(LogLevel.WARNING, description="Root logging level")

    @field_validator('level', mode='before')
    @classmethod
    def validate_level(cls, v) -> LogLevel:
        """Validate and convert level names to enum, ignoring case."""
        if isinstance(v, str):
            try:
                return LogLevel(v.strip().upper())
            except ValueError:
                raise ValueError(f"Invalid logging level: {v}")
        return v

    def get_numeric_level(self) -> int:
        """Get the level as understood by the logging module."""
        return getattr(logging, self.level.value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {'level': self.level.value}


class LocatorConfig(BaseModel):
    """
    Main configuration for homefind.

    Every section is optional; missing sections take their defaults so an
    absent or empty configuration file behaves exactly like the built-in
    settings.
    """

    model_config = ConfigDict(extra='forbid')

    indexer: IndexerConfig = Field(default_factory=IndexerConfig, description="Index build settings")
    search: SearchConfig = Field(default_factory=SearchConfig, description="Query matching settings")
    ui: UIConfig = Field(default_factory=UIConfig, description="Terminal front-end settings")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")

    def validate_configuration(self) -> List[str]:
        """
        Check for settings that are valid but probably unintended.

        Returns:
            List of warning messages
        """
        warnings = []

        if self.indexer.progress_interval < 100:
            warnings.append(
                f"Very small progress_interval ({self.indexer.progress_interval}) will flood the terminal"
            )

        if self.ui.reserved_rows == 0:
            warnings.append("reserved_rows is 0; the header and footer may scroll off screen")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'indexer': self.indexer.model_dump(),
            'search': self.search.model_dump(),
            'ui': self.ui.model_dump(),
            'logging': self.logging.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LocatorConfig':
        """Create configuration from dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of configuration."""
        return (
            f"LocatorConfig(progress_interval={self.indexer.progress_interval}, "
            f"max_results={self.search.max_results}, "
            f"log_level={self.logging.level.value})"
        )
