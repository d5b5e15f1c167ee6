"""issuedesk TUI Application."""

from __future__ import annotations

import logging

from textual.app import App
from textual.binding import Binding

from .config import Settings
from .github import GitHubAuthError, GitHubClient
from .services import ConfigService, IssueService, RepositoryService
from .storage import AnnotationStore, RepositoryListCache
from .ui.screens import RepositoryListScreen
from .ui.widgets import SettingsModal, SettingsUpdate

logger = logging.getLogger(__name__)


class IssueDeskApp(App):
    """issuedesk - GitHub issues with private notes."""

    TITLE = "issuedesk"

    CSS_PATH = "ui/styles.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("comma", "settings", "Settings", show=True),
    ]

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self.client: GitHubClient | None = None
        self._retired_clients: list[GitHubClient] = []
        self.auth_error: str | None = None
        self.config_service = ConfigService(self.settings.config_dir)
        self._init_services()

    def _init_services(self) -> None:
        """Build the GitHub client and the services from the current config.

        A replaced client stays open until the app exits: workers started
        before the change still hold it.
        """
        if self.client is not None:
            self._retired_clients.append(self.client)

        config = self.config_service.get_config()
        try:
            self.client = GitHubClient.from_config(config.github, config.ui.page_size)
            self.auth_error = None
        except GitHubAuthError as e:
            logger.warning("GitHub client unavailable: %s", e)
            self.client = None
            self.auth_error = str(e)

        data_directory = self.config_service.data_directory
        self.repository_service = RepositoryService(
            self.client, RepositoryListCache(data_directory)
        )
        self.issue_service = IssueService(
            self.client, AnnotationStore(data_directory), config.ui.issue_state
        )
        logger.info("Using data directory %s", data_directory)

    def on_mount(self) -> None:
        """Called when app is mounted."""
        if self.config_service.has_config_error:
            self.notify(
                f"{self.config_service.config_error}. Using defaults.",
                severity="warning",
                timeout=8,
            )
        if self.auth_error:
            self.notify(
                "No GitHub token found. Press , to add one.", severity="warning", timeout=8
            )
        self.push_screen(RepositoryListScreen())

    def on_unmount(self) -> None:
        for client in [*self._retired_clients, self.client]:
            if client is not None:
                client.close()
        self._retired_clients.clear()

    def action_settings(self) -> None:
        """Show the settings modal."""
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            SettingsModal(self.config_service.get_config(), str(self.config_service.config_path)),
            callback=self._handle_settings,
        )

    def _handle_settings(self, update: SettingsUpdate | None) -> None:
        if update is None:
            return
        try:
            self.config_service.update_github(update.token, update.username)
            self.config_service.update_data_directory(update.data_directory)
        except OSError as e:
            logger.error("Could not save settings: %s", e)
            self.notify(f"Could not save settings: {e}", severity="error", timeout=5)
            return

        self._init_services()
        self.notify("Settings saved", timeout=2)
        if self.auth_error:
            self.notify(self.auth_error, severity="warning", timeout=5)

        reload = getattr(self.screen, "reload", None)
        if callable(reload):
            reload()


def run(settings: Settings | None = None) -> None:
    """Run the issuedesk application."""
    app = IssueDeskApp(settings)
    app.run()
