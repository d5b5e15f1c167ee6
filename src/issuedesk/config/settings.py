"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


def _default_config_dir() -> Path:
    return Path.home() / ".config" / "issuedesk"


class Settings(BaseSettings):
    """Application settings."""

    config_dir: Path = Field(
        default_factory=_default_config_dir,
        description="Directory containing config.yml",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "ISSUEDESK_",
    }
