"""
Configuration management for the Parcel Tracker application.

This module handles:
- Database path and URL configuration
- Environment-specific configuration (development vs. production)
- Lifecycle strictness and credential hashing settings
- Log level
"""

import os
from pathlib import Path
from typing import Optional

from .constants import (
    APP_NAME,
    APP_VERSION,
    DATABASE_FILENAME,
    DEFAULT_PASSWORD_ITERATIONS,
)

ENV_PREFIX = "PARCEL_TRACKER_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read a PARCEL_TRACKER_* environment variable."""
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


class Config:
    """
    Application configuration manager.

    Handles database location, environment settings and the service-level
    switches read from PARCEL_TRACKER_* environment variables.
    """

    def __init__(self, environment: str = "production"):
        """
        Initialize configuration.

        Args:
            environment: Environment mode - 'production' or 'development'
        """
        self.environment = environment
        self._app_name = APP_NAME
        self._app_version = APP_VERSION

        if environment == "development":
            self._base_dir = self._get_project_data_dir()
        else:
            self._base_dir = self._get_user_documents_dir()

        self._database_dir = self._base_dir
        self._database_path = self._database_dir / DATABASE_FILENAME
        self._database_url_override = _env("DATABASE_URL")

        self._strict_transitions = (_env("STRICT_TRANSITIONS", "false").lower() in _TRUE_VALUES)
        self._password_iterations = int(
            _env("PASSWORD_ITERATIONS", str(DEFAULT_PASSWORD_ITERATIONS))
        )
        self._log_level = _env("LOG_LEVEL", "INFO").upper()

        # Only a file-based default database needs a directory on disk
        if self._database_url_override is None:
            self._ensure_directories()

    def _get_project_data_dir(self) -> Path:
        """
        Get the project's data directory for development.

        Returns:
            Path to project data/ directory
        """
        project_root = Path(__file__).parent.parent.parent
        return project_root / "data"

    def _get_user_documents_dir(self) -> Path:
        """
        Get the user's Documents directory for production.

        Returns:
            Path to user's Documents folder with app subdirectory
        """
        if os.name == "nt":  # Windows
            documents = Path(os.path.expanduser("~")) / "Documents"
        else:  # Linux/Mac
            documents = Path.home() / "Documents"

        return documents / "ParcelTracker"

    def _ensure_directories(self):
        """Create necessary directories if they don't exist."""
        self._database_dir.mkdir(parents=True, exist_ok=True)

    @property
    def app_name(self) -> str:
        """Application name."""
        return self._app_name

    @property
    def app_version(self) -> str:
        """Application version."""
        return self._app_version

    @property
    def database_path(self) -> Path:
        """Full path to the default database file."""
        return self._database_path

    @property
    def database_url(self) -> str:
        """
        SQLAlchemy database URL.

        PARCEL_TRACKER_DATABASE_URL wins over the environment's default file.

        Returns:
            Database URL string for SQLAlchemy
        """
        if self._database_url_override:
            return self._database_url_override

        # Use forward slashes for SQLite URL
        db_path_str = str(self._database_path).replace("\\", "/")
        return f"sqlite:///{db_path_str}"

    @property
    def strict_transitions(self) -> bool:
        """Whether status changes must follow the transition table."""
        return self._strict_transitions

    @property
    def password_iterations(self) -> int:
        """PBKDF2 iteration count for new password hashes."""
        return self._password_iterations

    @property
    def log_level(self) -> str:
        """Root log level name (e.g. 'INFO')."""
        return self._log_level

    def database_exists(self) -> bool:
        """
        Check if the database exists.

        Non-file URLs (in-memory, server databases) are assumed to exist.

        Returns:
            True if database exists, False otherwise
        """
        if self._database_url_override:
            return True
        return self._database_path.exists()

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(environment='{self.environment}', database_url='{self.database_url}')"


# Global configuration instance
_config_instance: Optional[Config] = None


def get_config(environment: Optional[str] = None) -> Config:
    """
    Get the global configuration instance.

    Once created, the singleton's environment cannot be changed by passing
    a different environment argument - this prevents accidental database
    switching mid-session.

    Args:
        environment: Optional environment for initial creation. If None, uses
                    PARCEL_TRACKER_ENV or defaults to production. Ignored if
                    singleton already exists.

    Returns:
        Config instance
    """
    global _config_instance

    if _config_instance is None:
        if environment is None:
            environment = _env("ENV", "production")
        _config_instance = Config(environment)
    elif environment is not None and environment != _config_instance.environment:
        import logging

        logger = logging.getLogger(__name__)
        logger.warning(
            f"get_config() called with environment='{environment}' but singleton "
            f"already exists with environment='{_config_instance.environment}'. "
            f"Returning existing singleton to prevent database switching."
        )

    return _config_instance


def reset_config():
    """
    Reset the global configuration instance.

    Useful for testing.
    """
    global _config_instance
    _config_instance = None
