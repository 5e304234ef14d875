# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

"""
Configuration loader for header-warden.

Loads configuration from a JSON file with fallback to environment variables.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = [
    ".c", ".cc", ".cpp", ".cxx", ".c++",
    ".h", ".hh", ".hpp", ".hxx", ".h++",
    ".inl", ".ipp", ".tpp",
]

DEFAULT_IGNORE_DIRS = [
    # Version control
    ".git", ".hg", ".svn",
    # Build output
    "build", "cmake-build-debug", "cmake-build-release", "out", "dist",
    # Dependencies
    "_deps", "third_party", "vendor", "node_modules",
    # IDE
    ".vscode", ".idea", ".cache",
]

DEFAULT_PARALLEL_THRESHOLD = 4


def _parse_csv_list(raw_value: Optional[str]) -> list[str]:
    """Parse comma-separated environment variable values into a list."""
    if not raw_value:
        return []
    return [item.strip() for item in raw_value.split(",") if item.strip()]


def _parse_bool(raw_value: Optional[str], default: bool) -> bool:
    if raw_value is None or not raw_value.strip():
        return default
    return raw_value.strip().lower() in ("1", "true", "yes", "on")


def _default_workers() -> int:
    return max(1, (os.cpu_count() or 2) - 1)


class Config:
    """Configuration manager for header-warden."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to a JSON config file. If None, searches in:
                1. ./header_warden.json (current directory)
                2. ~/.header_warden/config.json
                3. Falls back to environment variables
        """
        self.config_data: Dict[str, Any] = {}
        self.source: Optional[Path] = None
        self._load_config(config_path)

    def _load_config(self, config_path: Optional[Path] = None):
        """Load configuration from file or environment."""
        # Try specified path first
        if config_path:
            if config_path.exists():
                self._load_from_file(config_path)
                return
            else:
                logger.info(
                    f"Config path {config_path} does not exist, "
                    "using environment variables"
                )
                self._load_from_env()
                return

        # Try current directory
        local_config = Path("header_warden.json")
        if local_config.exists():
            self._load_from_file(local_config)
            return

        # Try user config directory
        user_config = Path.home() / ".header_warden" / "config.json"
        if user_config.exists():
            self._load_from_file(user_config)
            return

        logger.debug("No config file found, using environment variables")
        self._load_from_env()

    def _load_from_file(self, path: Path):
        """Load configuration from JSON file."""
        try:
            with open(path, 'r', encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top-level JSON value must be an object")
            self.config_data = data
            self.source = path
            logger.info(f"Loaded configuration from {path}")
        except (OSError, ValueError) as e:
            logger.error(f"Error loading config from {path}: {e}")
            self._load_from_env()

    def _load_from_env(self):
        """Load configuration from environment variables."""
        extensions = _parse_csv_list(os.getenv("HEADER_WARDEN_EXTENSIONS"))
        ignore_dirs = _parse_csv_list(os.getenv("HEADER_WARDEN_IGNORE_DIRS"))
        self.config_data = {
            "report": {
                "bare": _parse_bool(os.getenv("HEADER_WARDEN_REPORT_BARE"), True),
                "unused": _parse_bool(os.getenv("HEADER_WARDEN_REPORT_UNUSED"), True),
                "unlisted": _parse_bool(os.getenv("HEADER_WARDEN_REPORT_UNLISTED"), True),
            },
            "scan": {
                "extensions": extensions or list(DEFAULT_EXTENSIONS),
                "ignore_dirs": ignore_dirs or list(DEFAULT_IGNORE_DIRS),
            },
            "analysis": {
                "namespace": os.getenv("HEADER_WARDEN_NAMESPACE", "std"),
            },
            "run": {
                "parallel_threshold": os.getenv(
                    "HEADER_WARDEN_PARALLEL_THRESHOLD", str(DEFAULT_PARALLEL_THRESHOLD)
                ),
            },
            "logging": {
                "level": os.getenv("HEADER_WARDEN_LOG_LEVEL", "INFO"),
            },
            "api": self._load_api_from_env(),
        }

    def _load_api_from_env(self) -> Dict[str, Any]:
        """Load HTTP API config from environment variables."""
        allowed_ips_raw = os.getenv("HEADER_WARDEN_API_ALLOWED_IPS", "127.0.0.1,::1")
        return {
            "enabled": _parse_bool(os.getenv("HEADER_WARDEN_API_ENABLED"), True),
            "host": os.getenv("HEADER_WARDEN_API_HOST", "127.0.0.1"),
            "port": os.getenv("HEADER_WARDEN_API_PORT", "8766"),
            "api_key": os.getenv("HEADER_WARDEN_API_KEY") or None,
            "allowed_ips": _parse_csv_list(allowed_ips_raw),
        }

    def _get_int(self, key: str, default: int, minimum: int = 0) -> int:
        value = self.get(key, default)
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            logger.warning("Invalid %s '%s', defaulting to %s", key, value, default)
            return default
        if parsed < minimum:
            logger.warning("%s must be >= %s, got %s; defaulting to %s", key, minimum, parsed, default)
            return default
        return parsed

    def _get_bool(self, key: str, default: bool) -> bool:
        value = self.get(key, default)
        if isinstance(value, str):
            return _parse_bool(value, default)
        return bool(value)

    # Getters for easy access
    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot-notation key."""
        keys = key.split(".")
        value = self.config_data
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
        return value if value is not None else default

    # --- Report toggles ---

    @property
    def report_bare(self) -> bool:
        return self._get_bool("report.bare", True)

    @property
    def report_unused(self) -> bool:
        return self._get_bool("report.unused", True)

    @property
    def report_unlisted(self) -> bool:
        return self._get_bool("report.unlisted", True)

    # --- File discovery ---

    @property
    def extensions(self) -> list[str]:
        """File suffixes analyzed when walking directories."""
        value = self.get("scan.extensions", DEFAULT_EXTENSIONS)
        if isinstance(value, str):
            value = _parse_csv_list(value)
        return [ext if ext.startswith(".") else f".{ext}" for ext in value]

    @property
    def ignore_dirs(self) -> list[str]:
        """Directory names skipped when walking directories."""
        value = self.get("scan.ignore_dirs", DEFAULT_IGNORE_DIRS)
        if isinstance(value, str):
            value = _parse_csv_list(value)
        return list(value)

    @property
    def namespace(self) -> str:
        return self.get("analysis.namespace", "std")

    # --- Execution ---

    @property
    def workers(self) -> int:
        """Get worker thread count; HEADER_WARDEN_WORKERS takes precedence."""
        env_workers = os.getenv("HEADER_WARDEN_WORKERS")
        if env_workers:
            try:
                return max(1, int(env_workers))
            except ValueError:
                logger.warning("Invalid HEADER_WARDEN_WORKERS '%s', ignoring", env_workers)
        return self._get_int("run.workers", _default_workers(), minimum=1)

    @property
    def parallel_threshold(self) -> int:
        """Minimum number of files before the worker pool is used."""
        return self._get_int("run.parallel_threshold", DEFAULT_PARALLEL_THRESHOLD, minimum=1)

    # --- Logging ---

    @property
    def log_level(self) -> str:
        return str(self.get("logging.level", "INFO")).upper()

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path from config or environment."""
        env_log_file = os.getenv("HEADER_WARDEN_LOG_FILE")
        if env_log_file:
            return env_log_file
        return self.get("logging.file") or None

    # --- HTTP API ---

    @property
    def api_enabled(self) -> bool:
        return self._get_bool("api.enabled", True)

    @property
    def api_host(self) -> str:
        return self.get("api.host", "127.0.0.1")

    @property
    def api_port(self) -> int:
        return self._get_int("api.port", 8766, minimum=1)

    @property
    def api_key(self) -> Optional[str]:
        return self.get("api.api_key")

    @property
    def api_allowed_ips(self) -> list[str]:
        return self.get("api.allowed_ips", ["127.0.0.1", "::1"])

    @property
    def api_max_source_bytes(self) -> int:
        return self._get_int("api.max_source_bytes", 2_000_000, minimum=1)


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_config(config_path: Optional[Path] = None):
    """Load configuration from specified path."""
    global _config
    _config = Config(config_path)
    return _config
