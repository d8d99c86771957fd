"""
Minimal Configuration Reader for Quake Log Tools

A lightweight configuration system for the Quake log tools that provides:
- Profile-based configuration management
- JSON-based configuration storage with read-only access
- Local override files for machine-specific settings
- Hierarchical configuration with dot-notation access
- Automatic path resolution for file paths

Usage:
    # Use the default singleton instance
    from config import config
    value = config.get('paths.log_file')

    # Create a custom instance with specific profile
    from config import Config
    custom_config = Config(profile='my_server')

The configuration system loads settings in this order (later overrides earlier):
1. Default or specified profile (profiles/<profile>.json)
2. Profile-specific local overrides (profiles/<profile>.local.json)
"""

from typing import Dict, Any, List, Optional
from pathlib import Path

from quake_log_tools.base import JSONTool, logger


class Config(JSONTool):
    """
    A minimal JSON-based configuration reader for the Quake log tools.

    Attributes:
        config_dir (str): Directory containing profile JSON files
        profile (str): Currently active profile name
        data (dict): Loaded configuration data
    """

    DEFAULT_CONFIG_DIR = str(Path(__file__).parent / 'profiles')
    DEFAULT_PROFILE = "default"
    LOCAL_SUFFIX = ".local"

    def __init__(self, config_dir: str = None, profile: str = None,
                 config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Config instance.

        Args:
            config_dir (str, optional): Directory for config profiles.
                Defaults to 'profiles' subdirectory relative to this file.
            profile (str, optional): Profile name to use. Defaults to 'default'.
            config (dict, optional): Base configuration dictionary for JSONTool compatibility.
        """
        super().__init__(config)

        self.config_dir = config_dir or self.DEFAULT_CONFIG_DIR
        self.profile = profile or self.DEFAULT_PROFILE
        self.data = {}

        self._load()

    def run(self) -> Dict[str, Any]:
        """
        Run the config tool.

        Returns:
            The full configuration dictionary.
        """
        return self.get_full_config()

    def _load(self):
        """
        Load configuration from the profile JSON file and merge local overrides.

        A missing default profile is created empty. A missing named profile,
        or one that cannot be read, leaves the configuration empty.
        """
        profile_path = Path(self.config_dir) / f"{self.profile}.json"

        if not profile_path.exists():
            if self.profile == self.DEFAULT_PROFILE:
                self._create_default_profile(str(profile_path))
            else:
                logger.warning(f"Profile '{self.profile}' not found. Using empty configuration.")
                self.data = {}
            return

        try:
            self.data = self.read_json(str(profile_path))
            logger.info(f"Loaded configuration from '{self.profile}'")
            self._load_local_overrides()
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration: {e}")
            self.data = {}

    def _create_default_profile(self, profile_path: str):
        """
        Create an empty default profile so it can be edited in place.

        Args:
            profile_path (str): Path where the default profile will be created
        """
        default_config = {}
        try:
            Path(profile_path).parent.mkdir(parents=True, exist_ok=True)
            self.write_json(default_config, profile_path)
            logger.info(f"Created default profile at '{profile_path}'")
        except OSError as e:
            logger.error(f"Error creating default configuration: {e}")
        self.data = default_config

    def _load_local_overrides(self):
        """
        Deep-merge '<profile>.local.json' over the loaded profile, if present.
        """
        local_path = Path(self.config_dir) / f"{self.profile}{self.LOCAL_SUFFIX}.json"
        if not local_path.exists():
            logger.debug(f"No local overrides found for profile '{self.profile}'")
            return

        try:
            overrides = self.read_json(str(local_path))
        except (OSError, ValueError) as e:
            logger.error(f"Error loading local overrides: {e}")
            return

        if isinstance(overrides, dict):
            self._deep_merge(self.data, overrides)
            logger.info(f"Loaded and merged local overrides from '{local_path}'")

    def _deep_merge(self, target: Dict[str, Any], source: Dict[str, Any]):
        """
        Deep merge two dictionaries.

        Nested dictionaries are merged recursively; any other value in source
        replaces the value in target.
        """
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._deep_merge(target[key], value)
            else:
                target[key] = value

    def get(self, path: str = None, default: Any = None) -> Any:
        """
        Get a configuration value by path using dot notation.

        Args:
            path (str, optional): Dot notation path to the value
                (e.g., "general.output_path", "paths.log_file").
                If None, returns the entire configuration dictionary.
            default (Any, optional): Value to return if path not found.

        Returns:
            Any: The configuration value at the specified path, or default if not found.

        Examples:
            >>> config.get('game_report.show_ranking', True)
            True
            >>> config.get()  # Returns entire config
            {'general': {...}, 'paths': {...}}
        """
        if path is None:
            return self.data

        current = self.data
        if path:
            for key in path.split('.'):
                if isinstance(current, dict) and key in current:
                    current = current[key]
                else:
                    return default

        return current

    def list_profiles(self) -> List[str]:
        """
        List all available profile names.

        Returns:
            List[str]: Profile names (without .json extension), local override files excluded.
        """
        config_path = Path(self.config_dir)
        return sorted(f.stem for f in config_path.glob("*.json")
                      if not f.stem.endswith(self.LOCAL_SUFFIX))

    def switch_profile(self, profile: str) -> bool:
        """
        Switch to a different profile and reload.

        Args:
            profile (str): Name of profile to switch to (without .json extension).

        Returns:
            bool: True if successful, False if profile not found.
        """
        profile_path = Path(self.config_dir) / f"{profile}.json"
        if profile_path.exists():
            self.profile = profile
            self._load()
            return True
        else:
            logger.warning(f"Profile '{profile}' not found.")
            return False

    def get_full_config(self) -> Dict[str, Any]:
        return self.data

    def get_path(self, path_key: str, fallback: str = None) -> str:
        """
        Get a resolved filesystem path from configuration.

        Args:
            path_key (str): Path key in dot notation (e.g., "paths.log_file")
            fallback (str, optional): Default path if not found

        Returns:
            str: Resolved absolute path. Returns empty string if path is None/empty.
                 Relative paths are resolved relative to the config directory.
        """
        path = self.get(path_key, fallback)
        if not path:
            return ""

        path_obj = Path(path)
        if path_obj.is_absolute():
            return str(path_obj)

        return str(Path(self.config_dir).parent / path)


# Global singleton instance for convenient access throughout the application
# Usage: from config import config; value = config.get('some.key')
config = Config()
