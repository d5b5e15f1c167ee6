"""Tests for --init-config."""

from pathlib import Path
from unittest.mock import patch

from issuedesk.cli.init_config import run_init_config
from issuedesk.cli.output import success
from issuedesk.services import ConfigService


class TestRunInitConfig:
    def test_writes_config_and_data_dir(self, tmp_path: Path, capsys):
        service = ConfigService(tmp_path / "config")

        with patch.object(ConfigService, "data_directory", new=tmp_path / "data"):
            exit_code = run_init_config(service)

        assert exit_code == 0
        assert service.config_path.exists()
        assert (tmp_path / "data").is_dir()
        out = capsys.readouterr().out
        assert "Generated config" in out
        assert "Created data directory" in out

    def test_existing_config_is_kept(self, tmp_path: Path, capsys):
        service = ConfigService(tmp_path / "config")
        service.update_github("ghp_abc", "")

        exit_code = run_init_config(service)

        assert exit_code == 1
        assert "use --force" in capsys.readouterr().out
        assert ConfigService(tmp_path / "config").get_config().github.token == "ghp_abc"

    def test_force_overwrites(self, tmp_path: Path, capsys):
        service = ConfigService(tmp_path / "config")
        service.update_github("ghp_abc", "")

        with patch.object(ConfigService, "data_directory", new=tmp_path / "data"):
            exit_code = run_init_config(service, force=True)

        assert exit_code == 0
        assert ConfigService(tmp_path / "config").get_config().github.token == ""

    def test_write_failure(self, tmp_path: Path, capsys):
        service = ConfigService(tmp_path / "config")

        with patch.object(service, "write_default", side_effect=PermissionError("denied")):
            exit_code = run_init_config(service)

        assert exit_code == 1
        captured = capsys.readouterr()
        assert "Could not write" in captured.err
        assert captured.out == ""


class TestOutput:
    def test_markup_in_messages_is_literal(self, capsys):
        success("Generated config: /tmp/[b]weird[/b]/config.yml")

        assert capsys.readouterr().out == "✓ Generated config: /tmp/[b]weird[/b]/config.yml\n"
