"""Tests for ConfigService."""

import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from issuedesk.models import IssueStateFilter
from issuedesk.services import ConfigService
from issuedesk.services.config_service import CONFIG_HEADER


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    return tmp_path / "config"


class TestConfigServiceLoading:
    """Tests for ConfigService file loading."""

    def test_default_on_missing_file(self, config_dir: Path):
        """Missing config.yml returns default config."""
        service = ConfigService(config_dir)
        config = service.get_config()

        assert config.github.token == ""
        assert config.ui.issue_state is IssueStateFilter.ALL
        assert not service.has_config_error

    def test_load_valid_config(self, config_dir: Path):
        config_dir.mkdir()
        (config_dir / "config.yml").write_text(
            """
github:
  token: ghp_abc
  username: octocat
paths:
  data_directory: /tmp/issuedesk-data
ui:
  newest_first: false
  issue_state: open
  page_size: 30
"""
        )

        service = ConfigService(config_dir)
        config = service.get_config()

        assert config.github.token == "ghp_abc"
        assert config.github.username == "octocat"
        assert service.data_directory == Path("/tmp/issuedesk-data")
        assert config.ui.newest_first is False
        assert config.ui.issue_state is IssueStateFilter.OPEN
        assert config.ui.page_size == 30
        assert not service.has_config_error

    def test_partial_config_uses_defaults(self, config_dir: Path):
        config_dir.mkdir()
        (config_dir / "config.yml").write_text("github:\n  username: octocat\nui:\n")

        config = ConfigService(config_dir).get_config()

        assert config.github.username == "octocat"
        assert config.ui.page_size == 100

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ("", "is empty"),
            ("github: [unclosed", "Invalid YAML"),
            ("ui:\n  page_size: 500\n", "Invalid config.yml"),
            ("- just\n- a list\n", "Invalid config.yml"),
        ],
    )
    def test_bad_config_falls_back_to_defaults(self, config_dir: Path, content, message):
        config_dir.mkdir()
        (config_dir / "config.yml").write_text(content)

        service = ConfigService(config_dir)
        config = service.get_config()

        assert config.ui.page_size == 100
        assert service.has_config_error
        assert message in service.config_error

    def test_config_is_cached_until_reload(self, config_dir: Path):
        service = ConfigService(config_dir)
        first = service.get_config()
        config_dir.mkdir()
        (config_dir / "config.yml").write_text("github:\n  username: later\n")

        assert service.get_config() is first
        service.reload()
        assert service.get_config().github.username == "later"


class TestConfigServiceSaving:
    """Tests for writing config.yml."""

    def test_write_default(self, config_dir: Path):
        service = ConfigService(config_dir)

        assert service.write_default() is True

        text = service.config_path.read_text()
        assert text.startswith(CONFIG_HEADER)
        assert yaml.safe_load(text)["ui"]["issue_state"] == "all"

    def test_write_default_does_not_overwrite(self, config_dir: Path):
        service = ConfigService(config_dir)
        service.update_github("ghp_abc", "octocat")

        assert service.write_default() is False
        assert ConfigService(config_dir).get_config().github.token == "ghp_abc"

    def test_write_default_force(self, config_dir: Path):
        service = ConfigService(config_dir)
        service.update_github("ghp_abc", "octocat")

        assert service.write_default(force=True) is True
        assert ConfigService(config_dir).get_config().github.token == ""

    def test_update_github_persists(self, config_dir: Path):
        service = ConfigService(config_dir)

        config = service.update_github(" ghp_abc ", "octocat")

        assert config.github.token == "ghp_abc"
        reloaded = ConfigService(config_dir).get_config()
        assert reloaded.github.username == "octocat"

    def test_saved_file_is_private(self, config_dir: Path):
        service = ConfigService(config_dir)
        service.update_github("ghp_abc", "")

        mode = stat.S_IMODE(service.config_path.stat().st_mode)
        assert mode == 0o600

    def test_token_never_lands_in_a_readable_file(self, config_dir: Path):
        """An existing world-readable config is replaced by a private file."""
        config_dir.mkdir()
        (config_dir / "config.yml").write_text("github:\n  token: ''\n")
        (config_dir / "config.yml").chmod(0o644)
        service = ConfigService(config_dir)
        real_replace = os.replace
        seen: list[tuple[int, str]] = []

        def spy(src, dst):
            seen.append((stat.S_IMODE(os.stat(src).st_mode), Path(src).read_text()))
            real_replace(src, dst)

        with patch("issuedesk.services.config_service.os.replace", side_effect=spy):
            service.update_github("secret-token", "me")

        assert len(seen) == 1
        mode, content = seen[0]
        assert "secret-token" in content
        assert mode == 0o600
        assert stat.S_IMODE(service.config_path.stat().st_mode) == 0o600
        assert list(config_dir.glob("*.tmp")) == []

    def test_update_data_directory_creates_it(self, config_dir: Path, tmp_path: Path):
        service = ConfigService(config_dir)
        target = tmp_path / "data" / "nested"

        service.update_data_directory(str(target))

        assert target.is_dir()
        assert service.data_directory == target
        assert ConfigService(config_dir).data_directory == target

    def test_save_clears_previous_error(self, config_dir: Path):
        config_dir.mkdir()
        (config_dir / "config.yml").write_text("github: [unclosed")
        service = ConfigService(config_dir)
        service.get_config()
        assert service.has_config_error

        service.update_github("ghp_abc", "")

        assert not service.has_config_error
