"""
Loading of the optional homefind YAML file.

Nothing here is required to run homefind: with no file present every section
keeps its built-in value. A file that exists but is unreadable, not a mapping,
or rejected by the models stops the program with a ConfigurationError.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass

from pydantic import ValidationError

from ..models.config import LocatorConfig


logger = logging.getLogger(__name__)


@dataclass
class ConfigParseResult:
    """
    A validated configuration and where it came from.

    Attributes:
        config: Settings to run with
        warnings: Suspicious but accepted values
        config_path: File the settings were read from, None for built-ins
        is_default: True when no file was found
    """
    config: LocatorConfig
    warnings: List[str]
    config_path: Optional[Path]
    is_default: bool


class ConfigurationError(Exception):
    """Raised when a configuration file cannot be used."""
    pass


class ConfigParser:
    """
    Finds, reads and validates the homefind configuration file.

    Lookup checks ~/.homefind.yaml, ~/.homefind.yml and then
    ~/.config/homefind/config.y(a)ml; the first existing file is used.
    """

    DEFAULT_CONFIG_NAMES = [
        '.homefind.yaml',
        '.homefind.yml',
    ]

    XDG_CONFIG_NAMES = [
        'config.yaml',
        'config.yml',
    ]

    def __init__(self, home: Optional[Union[str, Path]] = None, strict_mode: bool = False):
        """
        Args:
            home: Directory searched instead of the user's home
            strict_mode: Reject configurations that produce warnings
        """
        self.home = Path(home) if home is not None else None
        self.strict_mode = strict_mode
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Resolve the settings homefind runs with.

        An explicit config_path must exist. Without one the lookup locations
        are tried and the built-in values apply when none is present.

        Raises:
            ConfigurationError: On a missing explicit file, unreadable YAML,
                rejected values, or warnings in strict mode
        """
        if config_path:
            config_path = Path(config_path).expanduser()
            if not config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {config_path}")
            config_data = self._load_yaml_file(config_path)
            is_default = False
        else:
            config_path, config_data = self._find_and_load_config()
            is_default = config_data is None
            config_data = config_data or {}

        config = self._validate_config_data(config_data, config_path)

        warnings = config.validate_configuration()
        if self.strict_mode and warnings:
            raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")

        self.logger.info(f"Configuration loaded from {config_path or 'defaults'}")
        return ConfigParseResult(config=config, warnings=warnings,
                                 config_path=config_path, is_default=is_default)

    def get_search_paths(self) -> List[Path]:
        """Get candidate configuration files in lookup order."""
        home = self.home if self.home is not None else Path.home()
        candidates = [home / name for name in self.DEFAULT_CONFIG_NAMES]
        xdg_dir = home / '.config' / 'homefind'
        candidates.extend(xdg_dir / name for name in self.XDG_CONFIG_NAMES)
        return candidates

    def _find_and_load_config(self) -> tuple[Optional[Path], Optional[Dict[str, Any]]]:
        # (None, None) when no candidate exists
        for config_file in self.get_search_paths():
            if config_file.is_file():
                self.logger.info(f"Found configuration file: {config_file}")
                return config_file, self._load_yaml_file(config_file)

        self.logger.info("No configuration file found, using defaults")
        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Read one YAML file into a mapping; blank files count as empty.

        Raises:
            ConfigurationError: If the file is unreadable, not YAML, or not a mapping
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

        if data is None:
            self.logger.warning(f"Configuration file is empty: {file_path}")
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a YAML object, got {type(data).__name__}"
            )
        return data

    def _validate_config_data(self, config_data: Dict[str, Any],
                              config_path: Optional[Path]) -> LocatorConfig:
        try:
            return LocatorConfig.from_dict(config_data)
        except ValidationError as e:
            source = config_path or 'defaults'
            raise ConfigurationError(f"Configuration validation failed for {source}: {e}") from e

    def get_config_template(self) -> str:
        """Render the default settings as commented YAML for `homefind init-config`."""
        config_dict = LocatorConfig().to_dict()

        lines = [
            "# homefind configuration",
            "# The index itself always lives in ~/.index and is not configurable.",
            "",
        ]

        sections = [
            ("indexer", "Index build settings"),
            ("search", "Query matching (max_results may not exceed 1000)"),
            ("ui", "Terminal layout"),
            ("logging", "Diagnostic logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)"),
        ]

        for section_name, comment in sections:
            lines.append(f"# {comment}")
            section_yaml = yaml.dump({section_name: config_dict[section_name]},
                                     default_flow_style=False,
                                     sort_keys=False)
            lines.append(section_yaml.rstrip())
            lines.append("")

        return "\n".join(lines)


def load_config(config_path: Optional[Union[str, Path]] = None,
                home: Optional[Union[str, Path]] = None,
                strict_mode: bool = False) -> ConfigParseResult:
    """Shortcut for ConfigParser(home, strict_mode).load_config(config_path)."""
    return ConfigParser(home=home, strict_mode=strict_mode).load_config(config_path)


def create_config_template(output_path: Union[str, Path]) -> None:
    """
    Write the commented default configuration to output_path, creating parent
    directories as needed.

    Raises:
        ConfigurationError: If the file cannot be written
    """
    output_path = Path(output_path)
    template_content = ConfigParser().get_config_template()

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(template_content, encoding='utf-8')
    except OSError as e:
        raise ConfigurationError(f"Cannot create template file {output_path}: {e}") from e
