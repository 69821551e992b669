"""
Configuration management for the point-charge field plotter.

This module provides centralized configuration handling with YAML-based
parameter files and runtime configuration management.
"""

import math
import logging
from pathlib import Path
from typing import Dict, Any, Optional, TextIO, Union

import yaml
import torch

from ..errors import InvalidConfiguration


BASE_CONFIG_FILE = 'base_config.yaml'
REQUIRED_SECTIONS = ['physics', 'grid', 'plot', 'rendering', 'logging']
POSITIVE_PARAMETERS = [
    'physics.coulomb_constant',
    'grid.interval',
    'rendering.reference_scale',
    'rendering.arrow_length',
    'rendering.dpi',
    'rendering.charge_radius',
    'rendering.observation_radius'
]
NUMERIC_PARAMETERS = POSITIVE_PARAMETERS + ['plot.min_value']


class ConfigManager:
    """
    Centralized configuration manager for physics, sampling and rendering parameters.

    Loads the packaged defaults and merges an optional user file on top,
    with validation of the values the pipeline depends on.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_dir: Directory containing configuration files
        """
        if config_dir is None:
            config_dir = Path(__file__).parent
        self.config_dir = Path(config_dir)
        self._config = {}
        self._loaded_files = []

    def load_config(self, config_file: Union[str, Path]) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Relative names are resolved against the configuration directory;
        the .yaml extension may be omitted.

        Args:
            config_file: Name or path of configuration file

        Returns:
            Dictionary containing configuration parameters

        Raises:
            InvalidConfiguration: If the file is missing or not valid YAML
        """
        config_path = Path(config_file)
        if config_path.suffix not in ('.yaml', '.yml'):
            config_path = config_path.with_name(config_path.name + '.yaml')
        if not config_path.is_absolute() and not config_path.exists():
            config_path = self.config_dir / config_path

        if not config_path.exists():
            raise InvalidConfiguration(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidConfiguration(f"Error parsing {config_path}: {e}") from e

        if config is not None and not isinstance(config, dict):
            raise InvalidConfiguration(f"Configuration file {config_path} must contain a mapping")

        self._loaded_files.append(str(config_path))
        return config or {}

    def load_base_config(self) -> Dict[str, Any]:
        """Load base configuration file."""
        return self.load_config(BASE_CONFIG_FILE)

    def merge_configs(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge multiple configuration dictionaries.

        Later configurations override earlier ones for conflicting keys.

        Args:
            *configs: Configuration dictionaries to merge

        Returns:
            Merged configuration dictionary
        """
        merged = {}

        for config in configs:
            merged = self._deep_merge(merged, config)

        return merged

    def _deep_merge(self, dict1: Dict[str, Any], dict2: Dict[str, Any]) -> Dict[str, Any]:
        result = dict1.copy()

        for key, value in dict2.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def load_full_config(self, override_file: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
        """
        Load the base configuration and merge an optional override file.

        Args:
            override_file: User configuration taking precedence over the defaults

        Returns:
            Complete merged configuration
        """
        configs = [self.load_base_config()]
        if override_file is not None:
            configs.append(self.load_config(override_file))

        full_config = self.merge_configs(*configs)
        full_config = self._validate_config(full_config)

        self._config = full_config
        return full_config

    def _validate_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and process configuration parameters.

        Args:
            config: Configuration dictionary to validate

        Returns:
            Validated and processed configuration

        Raises:
            InvalidConfiguration: If configuration validation fails
        """
        config = self._process_numeric_values(config)

        for section in REQUIRED_SECTIONS:
            if not isinstance(config.get(section), dict):
                raise InvalidConfiguration(f"Required configuration section missing: {section}")

        for key in POSITIVE_PARAMETERS:
            value = self._lookup(config, key)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or not value > 0:
                raise InvalidConfiguration(f"Configuration value {key} must be a positive number, got {value!r}")

        figsize = config['rendering'].get('figsize')
        if (not isinstance(figsize, (list, tuple)) or len(figsize) != 2
                or not all(isinstance(v, (int, float)) and v > 0 for v in figsize)):
            raise InvalidConfiguration(f"Configuration value rendering.figsize must be two positive numbers, got {figsize!r}")

        min_value = config['plot'].get('min_value')
        if not isinstance(min_value, (int, float)) or isinstance(min_value, bool) or not math.isfinite(min_value):
            raise InvalidConfiguration(f"Configuration value plot.min_value must be a finite number, got {min_value!r}")

        level = str(config['logging'].get('level', 'INFO')).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise InvalidConfiguration(f"Unknown logging level: {level}")
        config['logging']['level'] = level

        config['device'] = resolve_device(self._lookup(config, 'hardware.device') or 'cpu')

        return config

    def _process_numeric_values(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Process numeric strings in configuration (including scientific notation).

        PyYAML reads values such as ``8.99e9`` as strings; these are converted
        to floats for the numeric parameters only, so text settings such as
        the plot title are left as written.

        Args:
            config: Configuration dictionary

        Returns:
            Configuration with processed numeric values
        """
        def convert_numeric(obj):
            if isinstance(obj, str):
                try:
                    return float(obj.strip())
                except ValueError:
                    return obj
            return obj

        for key in NUMERIC_PARAMETERS:
            *parents, name = key.split('.')
            section = self._lookup(config, '.'.join(parents))
            if isinstance(section, dict) and name in section:
                section[name] = convert_numeric(section[name])

        rendering = config.get('rendering')
        if isinstance(rendering, dict) and isinstance(rendering.get('figsize'), list):
            rendering['figsize'] = [convert_numeric(v) for v in rendering['figsize']]

        return config

    @staticmethod
    def _lookup(config: Dict[str, Any], key: str, default: Any = None) -> Any:
        value = config
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Supports dot notation for nested keys (e.g., 'grid.interval').

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        if not self._config:
            self.load_full_config()

        return self._lookup(self._config, key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value by key.

        Supports dot notation for nested keys.

        Args:
            key: Configuration key
            value: Value to set
        """
        if not self._config:
            self.load_full_config()

        keys = key.split('.')
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def print_config(self, section: Optional[str] = None, file: Optional[TextIO] = None) -> None:
        """
        Print configuration in formatted manner.

        Args:
            section: Specific section to print (prints all if None)
            file: Stream to print to (stdout if None)
        """
        config_to_print = self.config if section is None else self.config.get(section, {})

        print("=" * 60, file=file)
        print(f"Configuration{f' - {section}' if section else ''}", file=file)
        print("=" * 60, file=file)
        print(yaml.dump(config_to_print, default_flow_style=False, indent=2), file=file)
        print("=" * 60, file=file)

    @property
    def config(self) -> Dict[str, Any]:
        """Get current configuration."""
        if not self._config:
            self.load_full_config()
        return self._config

    @property
    def loaded_files(self) -> list:
        """Get list of loaded configuration files."""
        return self._loaded_files.copy()


def resolve_device(device: str) -> str:
    """
    Validate a torch device name, mapping 'auto' to CUDA when available.

    Raises:
        InvalidConfiguration: Unknown device name, or CUDA requested without CUDA support
    """
    if device == 'auto':
        return 'cuda' if torch.cuda.is_available() else 'cpu'
    try:
        resolved = torch.device(str(device))
    except (RuntimeError, ValueError) as e:
        raise InvalidConfiguration(f"Unknown device {device!r}: {e}") from e
    if resolved.type == 'cuda' and not torch.cuda.is_available():
        raise InvalidConfiguration(f"Device {device!r} requested but CUDA is not available")
    return str(resolved)


# Global configuration manager instance
config_manager = ConfigManager()

# Convenience functions for common operations
def get_config(key: str, default: Any = None) -> Any:
    """Get configuration value by key."""
    return config_manager.get(key, default)


__all__ = [
    'ConfigManager',
    'config_manager',
    'get_config',
    'resolve_device'
]
