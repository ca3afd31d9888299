"""Configuration management for the minqueens experiment suite.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize experiment settings and solver settings.

File format (high-level)
------------------------
- experiment_settings: N values, runs per N, base seed, and output directory.
- search_settings: solver knobs (per-restart attempt budget, parallel recount).

All methods return Python native types; the class does not validate semantics
beyond presence of keys and the top-level JSON shape.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            try:
                config = json.load(f)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in {self.config_path}: {exc}") from exc
        if not isinstance(config, dict):
            raise ValueError(f"Configuration root in {self.config_path} must be an object")
        return config

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_experiment_settings(self):
        """Return high-level experiment settings (sizes, runs, seed, output dir)."""
        return self.config.get("experiment_settings", {})

    def get_search_settings(self):
        """Return solver settings (attempt budget, parallel recount)."""
        return self.config.get("search_settings", {})

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
