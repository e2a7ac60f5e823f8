"""Configuration management for the Go rules engine."""

import copy
import json
import os
from typing import Dict, Any


class Config:
    """Configuration manager."""

    DEFAULT_CONFIG = {
        'rules': {
            'board_size': 19,
            'repeat': 'KO',  # NONE, KO or SUPERKO (ALL)
            'allow_rewrite': False,
            'allow_suicide': False
        }
    }

    def __init__(self, config_file: str = 'goban.json'):
        """Initialize configuration.

        Args:
            config_file: Path to config file
        """
        self.config_file = config_file
        self.config: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        """Load configuration from file, filling gaps with defaults."""
        if not os.path.exists(self.config_file):
            self.config = copy.deepcopy(self.DEFAULT_CONFIG)
            self.save()
            return

        try:
            with open(self.config_file, 'r') as f:
                loaded = json.load(f)
            if not isinstance(loaded, dict):
                raise ValueError("top level must be an object")
        except (OSError, ValueError) as e:
            print(f"Error loading config: {e}")
            self.config = copy.deepcopy(self.DEFAULT_CONFIG)
            return

        self.config = self._with_defaults(loaded)

    def save(self) -> None:
        """Save configuration to file."""
        try:
            with open(self.config_file, 'w') as f:
                json.dump(self.config, f, indent=2)
        except OSError as e:
            print(f"Error saving config: {e}")

    def _with_defaults(self, loaded: Dict[str, Any]) -> Dict[str, Any]:
        """Overlay loaded sections on a copy of the defaults.

        A known section that is not an object is replaced by its defaults.
        Unknown sections are kept untouched.
        """
        config = copy.deepcopy(self.DEFAULT_CONFIG)
        for section, values in loaded.items():
            if section not in config:
                config[section] = values
            elif isinstance(values, dict):
                config[section].update(values)
            else:
                print(f"Ignoring config section '{section}': expected an object")
        return config

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get a configuration value.

        Args:
            section: Configuration section
            key: Configuration key
            default: Default value if not found

        Returns:
            Configuration value
        """
        values = self.config.get(section)
        if isinstance(values, dict) and key in values:
            return values[key]
        return default

    def set(self, section: str, key: str, value: Any) -> None:
        """Set a configuration value, replacing a section that is not an object."""
        if not isinstance(self.config.get(section), dict):
            self.config[section] = {}
        self.config[section][key] = value

    def get_board_size(self) -> int:
        """Get board size.

        Returns:
            Board edge length
        """
        return int(self.get('rules', 'board_size', 19))

    def get_repeat_policy(self) -> str:
        """Get repetition policy name.

        Returns:
            'NONE', 'KO' or 'SUPERKO'
        """
        return self.get('rules', 'repeat', 'KO')

    def get_allow_rewrite(self) -> bool:
        return bool(self.get('rules', 'allow_rewrite', False))

    def get_allow_suicide(self) -> bool:
        return bool(self.get('rules', 'allow_suicide', False))
