"""Repository list screen."""

from __future__ import annotations

import logging

from rich.markup import escape
from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header, OptionList, Static
from textual.widgets.option_list import Option, OptionDoesNotExist

from ...github import GitHubClientError
from ...models import Repository
from ...services import RepositoryService
from .issue_list import IssueListScreen

logger = logging.getLogger(__name__)


class RepositoryListScreen(Screen):
    """The user's repositories. Enter opens one."""

    BINDINGS = [
        Binding("r", "refresh", "Refresh", show=True),
        Binding("j", "cursor_down", "↓", show=False),
        Binding("k", "cursor_up", "↑", show=False),
    ]

    @property
    def service(self) -> RepositoryService:
        return self.app.repository_service  # pyrefly: ignore[missing-attribute]

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="repository-status", classes="status-bar")
        yield OptionList(id="repository-list")
        yield Footer()

    def on_mount(self) -> None:
        self.reload()

    def reload(self) -> None:
        """Show the cached list, then fetch a fresh one."""
        self._show(self.service.load_cached())
        self.action_refresh()

    def action_refresh(self) -> None:
        self._set_status("[dim]Loading repositories…[/]")
        self.refresh_repositories()

    @work(thread=True, exclusive=True, group="repositories")
    def refresh_repositories(self) -> None:
        """Fetch the repository list off the UI thread."""
        config = self.app.config_service.get_config()  # pyrefly: ignore[missing-attribute]
        try:
            repositories = self.service.refresh(config.github.username or None)
        except GitHubClientError as e:
            logger.warning("Repository refresh failed: %s", e)
            self.app.call_from_thread(self._refresh_failed, str(e))
            return
        self.app.call_from_thread(self._show, repositories)

    def _refresh_failed(self, message: str) -> None:
        self._set_status("")
        self.notify(message, severity="error", timeout=5)

    def _show(self, repositories: list[Repository]) -> None:
        option_list = self.query_one("#repository-list", OptionList)
        highlighted = option_list.highlighted_option
        selected_id = highlighted.id if highlighted else None

        option_list.clear_options()
        option_list.add_options(self._option_for(repo) for repo in repositories)

        if not repositories:
            self._set_status("No repositories. Press [b],[/] to add a GitHub token.")
            return
        self._set_status(f"[dim]{len(repositories)} repositories[/]")

        if selected_id is not None:
            try:
                option_list.highlighted = option_list.get_option_index(selected_id)
            except OptionDoesNotExist:
                option_list.highlighted = 0
        else:
            option_list.highlighted = 0
        option_list.focus()

    def _option_for(self, repository: Repository) -> Option:
        parts = [f"[b]{escape(repository.full_name)}[/]"]
        if repository.is_private:
            parts.append("[yellow]private[/]")
        if repository.is_archived:
            parts.append("[dim]archived[/]")
        if repository.language:
            parts.append(f"[dim]{escape(repository.language)}[/]")
        parts.append(f"[dim]{repository.open_issues_count} open[/]")
        prompt = " ".join(parts)
        if repository.description:
            prompt += f"\n  [dim]{escape(repository.description)}[/]"
        return Option(prompt, id=repository.full_name)

    def _set_status(self, text: str) -> None:
        self.query_one("#repository-status", Static).update(text)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option.id is None:
            return
        repository = self.service.find(event.option.id)
        if repository is not None:
            self.app.push_screen(IssueListScreen(repository))

    def action_cursor_down(self) -> None:
        self.query_one("#repository-list", OptionList).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one("#repository-list", OptionList).action_cursor_up()
