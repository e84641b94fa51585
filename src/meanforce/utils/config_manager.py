"""
Configuration management module for meanforce.

This module provides functionality for loading, validating, and managing
configuration settings for a mean force run.
"""
import copy
import yaml
from pathlib import Path
import logging
from typing import Dict, Any, Optional, Union

from .helpers import update_dict_recursively

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'system': {
        'n_atoms': None,
        'use_mass': False,
        'psf_file': None,
        'mass_tolerance': 0.001,
    },
    'input': {
        'files': [],
        'scan': False,
        'directory': '.',
        'tail': '.fout.dat',
    },
    'statistics': {
        'pooled': True,
    },
    'alignment': {
        'negative_angle_threshold': -0.08,
    },
    'output': {
        'directory': None,
        'series_file': None,
        'plot': False,
    },
}


class ConfigManager:
    """Class for managing meanforce configuration settings."""

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager with the defaults.

        Args:
            config_file: Path to a YAML file overriding the defaults (optional)
        """
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        if config_file is not None:
            self.load_config(config_file)

    def load_config(self, config_file: Union[str, Path]) -> None:
        """
        Load configuration from a YAML file on top of the current settings.

        Args:
            config_file: Path to the configuration file
        """
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        logger.info(f"Loading configuration from {config_path}")
        with open(config_path, 'r') as f:
            user_cfg = yaml.safe_load(f)
        if user_cfg:
            if not isinstance(user_cfg, dict):
                raise ValueError(f"Configuration file {config_path} must hold a mapping.")
            update_dict_recursively(self.config, user_cfg)

    def validate(self) -> None:
        """Validate the settings needed for a run."""
        for key in DEFAULT_CONFIG:
            if key not in self.config:
                raise ValueError(f"Missing required configuration key: {key}")

        system = self.config['system']
        n_atoms = system.get('n_atoms')
        if not isinstance(n_atoms, int) or isinstance(n_atoms, bool) or n_atoms <= 0:
            raise ValueError(f"system.n_atoms must be a positive integer, got {n_atoms!r}")
        if n_atoms % 2 != 0:
            raise ValueError(f"system.n_atoms must be even (two equal subunits), got {n_atoms}")
        if system.get('use_mass') and not system.get('psf_file'):
            raise ValueError("system.psf_file is required when system.use_mass is set")
        if system.get('mass_tolerance', 0) <= 0:
            raise ValueError("system.mass_tolerance must be positive")

        inp = self.config['input']
        if not inp.get('scan') and not inp.get('files'):
            raise ValueError("No input files given; list input.files or set input.scan")

    def update_config(self, updates: Dict[str, Any]) -> None:
        """
        Update configuration settings.

        Args:
            updates: Dictionary of configuration updates
        """
        update_dict_recursively(self.config, updates)

    def get_section(self, name: str) -> Dict[str, Any]:
        return self.config.get(name, {})

    def to_dict(self) -> Dict[str, Any]:
        """
        Get the current configuration as a dictionary.

        Returns:
            Deep copy of the current configuration
        """
        return copy.deepcopy(self.config)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ConfigManager':
        """
        Create a ConfigManager from a dictionary merged over the defaults.

        Args:
            config_dict: Dictionary of configuration settings

        Returns:
            ConfigManager instance
        """
        instance = cls()
        instance.update_config(config_dict)
        return instance
