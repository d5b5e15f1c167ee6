"""Application configuration stored in config.yml."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .enums import IssueStateFilter

DEFAULT_DATA_DIRECTORY = "~/.local/share/issuedesk"


class GitHubConfig(BaseModel):
    """Credential and account used to reach the GitHub API."""

    token: str = Field(default="", description="Personal access token (stored unencrypted)")
    username: str = Field(
        default="",
        description="Account whose repositories are listed (empty = authenticated user)",
    )
    base_url: str = Field(default="api.github.com", description="API host (Enterprise: custom)")


class PathConfig(BaseModel):
    """Filesystem locations owned by the application."""

    data_directory: str = DEFAULT_DATA_DIRECTORY


class UIConfig(BaseModel):
    """Minor presentation preferences."""

    newest_first: bool = True
    issue_state: IssueStateFilter = IssueStateFilter.ALL
    page_size: int = Field(default=100, ge=1, le=100)


class AppConfig(BaseModel):
    """Root of config.yml."""

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    paths: PathConfig = Field(default_factory=PathConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    @field_validator("github", "paths", "ui", mode="before")
    @classmethod
    def empty_section_to_default(cls, value: object) -> object:
        """Treat an empty YAML section (`github:`) as the defaults."""
        return {} if value is None else value

    @property
    def has_github_token(self) -> bool:
        return bool(self.github.token.strip())

    @property
    def data_directory(self) -> Path:
        return Path(self.paths.data_directory).expanduser()

    @classmethod
    def default(cls) -> "AppConfig":
        return cls()
