"""Configuration service for loading and saving config.yml."""

import logging
import os
import tempfile
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models import AppConfig

logger = logging.getLogger(__name__)

CONFIG_HEADER = """\
# issuedesk configuration
#
# github.token is stored unencrypted; this file is written with
# owner-only permissions. Leave it empty to fall back to GITHUB_TOKEN
# or `gh auth token`.
#
# github.username: account whose repositories are listed
#   (empty = the authenticated user, including private repositories)
# paths.data_directory: where repositories.json and issues/*.json live
# ui.issue_state: open | closed | all
# ui.page_size: issues fetched per repository (1-100, single page)

"""


def render_config_yaml(config: AppConfig) -> str:
    """Serialize a config to commented YAML."""
    data = config.model_dump(mode="json")
    return CONFIG_HEADER + yaml.safe_dump(data, default_flow_style=False, sort_keys=False)


class ConfigService:
    """Service for loading and caching application configuration."""

    CONFIG_FILE = "config.yml"

    def __init__(self, config_dir: Path) -> None:
        """Initialize the config service.

        Args:
            config_dir: Directory holding config.yml
        """
        self.config_dir = config_dir.expanduser()
        self._config: AppConfig | None = None
        self._config_error: str | None = None

    @property
    def config_path(self) -> Path:
        return self.config_dir / self.CONFIG_FILE

    @property
    def has_config_error(self) -> bool:
        """Check if there was an error loading config."""
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        """Get the config error message if any."""
        return self._config_error

    @property
    def data_directory(self) -> Path:
        return self.get_config().data_directory

    def get_config(self) -> AppConfig:
        """Get configuration, loading from file if not cached."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def reload(self) -> None:
        """Clear cached configuration, forcing reload on next access."""
        self._config = None
        self._config_error = None

    def save(self, config: AppConfig) -> None:
        """Write config.yml and cache the new configuration.

        The token is in plain text, so the content goes to an owner-only
        temp file that then replaces config.yml.

        Raises:
            OSError: The file could not be written
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.CONFIG_FILE}.", suffix=".tmp", dir=self.config_dir
        )
        try:
            os.fchmod(fd, 0o600)
            with os.fdopen(fd, "w") as f:
                f.write(render_config_yaml(config))
            os.replace(tmp_name, self.config_path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        self._config = config
        self._config_error = None
        logger.info("Config saved to %s", self.config_path)

    def write_default(self, force: bool = False) -> bool:
        """Write a default config.yml.

        Returns:
            True if the file was written, False if one already exists
        """
        if self.config_path.exists() and not force:
            return False
        self.save(AppConfig.default())
        return True

    def update_github(self, token: str, username: str) -> AppConfig:
        """Store a new token and username."""
        config = self.get_config()
        github = config.github.model_copy(
            update={"token": token.strip(), "username": username.strip()}
        )
        updated = config.model_copy(update={"github": github})
        self.save(updated)
        return updated

    def update_data_directory(self, data_directory: str) -> AppConfig:
        """Point the caches at another directory, creating it if needed."""
        config = self.get_config()
        paths = config.paths.model_copy(update={"data_directory": data_directory})
        updated = config.model_copy(update={"paths": paths})
        updated.data_directory.mkdir(parents=True, exist_ok=True)
        self.save(updated)
        return updated

    def _load_config(self) -> AppConfig:
        """Load configuration from file or return default."""
        config_path = self.config_path
        self._config_error = None

        if not config_path.exists():
            logger.debug("No %s found, using defaults", self.CONFIG_FILE)
            return AppConfig.default()

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)

            if data is None:
                self._config_error = f"{self.CONFIG_FILE} is empty"
                logger.warning(self._config_error)
                return AppConfig.default()

            config = AppConfig(**data)
            logger.info("Loaded %s (data directory: %s)", config_path, config.data_directory)
            return config

        except yaml.YAMLError as e:
            self._config_error = f"Invalid YAML in {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return AppConfig.default()
        except (ValidationError, TypeError) as e:
            self._config_error = f"Invalid {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return AppConfig.default()
        except OSError as e:
            self._config_error = f"Error reading {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return AppConfig.default()
