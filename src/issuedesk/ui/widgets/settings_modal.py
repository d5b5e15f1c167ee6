"""Settings modal: GitHub credential and data directory."""

from dataclasses import dataclass

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from ...models import AppConfig


@dataclass(frozen=True)
class SettingsUpdate:
    """Values entered in the settings modal."""

    token: str
    username: str
    data_directory: str


class SettingsModal(ModalScreen[SettingsUpdate | None]):
    """Edit the GitHub token, username and data directory."""

    DEFAULT_CSS = """
    SettingsModal {
        align: center middle;
    }

    SettingsModal > Vertical {
        width: 70;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    SettingsModal Label {
        margin-top: 1;
    }

    SettingsModal .hint {
        color: $text-muted;
    }

    SettingsModal .buttons {
        height: auto;
        align: right middle;
        margin-top: 1;
    }

    SettingsModal Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, config: AppConfig, config_path: str) -> None:
        super().__init__()
        self._config = config
        self._config_path = config_path

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("[b]Settings[/]")
            yield Label("GitHub username")
            yield Input(self._config.github.username, placeholder="octocat", id="username")
            yield Label("Personal access token")
            yield Input(self._config.github.token, password=True, id="token")
            yield Static(
                f"Token is stored unencrypted in {self._config_path}",
                classes="hint",
            )
            yield Label("Data directory")
            yield Input(self._config.paths.data_directory, id="data-directory")
            with Horizontal(classes="buttons"):
                yield Button("Save", id="save", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_mount(self) -> None:
        self.query_one("#username", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save":
            self._save()
        else:
            self.action_cancel()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._save()

    def _save(self) -> None:
        self.dismiss(
            SettingsUpdate(
                token=self.query_one("#token", Input).value.strip(),
                username=self.query_one("#username", Input).value.strip(),
                data_directory=self.query_one("#data-directory", Input).value.strip()
                or self._config.paths.data_directory,
            )
        )

    def action_cancel(self) -> None:
        self.dismiss(None)
