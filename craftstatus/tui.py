"""Textual TUI — interactive Active / Ignored repository tree."""

from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Header, Label, Static, Tree
from textual.widgets.tree import TreeNode

from craftstatus.config import ScanConfig
from craftstatus.git import GitError
from craftstatus.ignore import add_to_ignore
from craftstatus.logs import ScanLog
from craftstatus.scanner import Scanner
from craftstatus.status import OverallStats, Repository, VersionReport
from craftstatus.theme import ICON_IGNORED, ICON_VERSION, ICON_WORKSPACE, repo_label, status_line
from craftstatus.updater import DirtyAction, UpdateResult, update_repository


class DirtyPrompt(ModalScreen[DirtyAction]):
    """Ask what to do with local changes before pulling."""

    CSS = """
    DirtyPrompt {
        align: center middle;
    }

    #dialog {
        width: 60;
        height: auto;
        border: thick $warning;
        background: $surface;
        padding: 1 2;
    }

    #dialog Horizontal {
        height: auto;
        margin-top: 1;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Label("Repository has local changes. Choose how to proceed:")
            with Horizontal():
                yield Button("Stash and Update", id="stash", variant="primary")
                yield Button("Reset and Update", id="reset", variant="error")
                yield Button("Cancel", id="cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(DirtyAction(event.button.id))


class RepoTree(Tree):
    """Active / Ignored sections, workspace → version → repository."""

    def update_data(self, reports: list[VersionReport]) -> None:
        self.clear()
        self.root.expand()
        active = self.root.add("Active", expand=True)
        ignored = self.root.add("Ignored", expand=False)

        workspaces: dict[tuple[str, bool], TreeNode] = {}
        for report in reports:
            if not report.fully_ignored:
                key = (report.workspace, False)
                if key not in workspaces:
                    workspaces[key] = active.add(f"{ICON_WORKSPACE} {report.workspace}", expand=True)
                ver = workspaces[key].add(f"{ICON_VERSION} {report.name}", expand=True)
                for repo in report.repositories:
                    ver.add_leaf(repo_label(repo), data=repo)

            if report.ignored:
                key = (report.workspace, True)
                if key not in workspaces:
                    workspaces[key] = ignored.add(f"{ICON_WORKSPACE} {report.workspace}", expand=True)
                ver = workspaces[key].add(f"{ICON_VERSION} {report.name}", expand=True)
                for name in report.ignored:
                    ver.add_leaf(Text(f"{ICON_IGNORED} {name}", style="dim"))


class LogTree(Tree):
    """Scan log lines, workspace → version → repository → line."""

    def update_data(self, logs: dict[str, dict[str, dict[str, list[str]]]]) -> None:
        self.clear()
        self.root.expand()
        for workspace, versions in logs.items():
            ws = self.root.add(f"{ICON_WORKSPACE} {workspace}", expand=True)
            for version, repos in versions.items():
                ver = ws.add(f"{ICON_VERSION} {version}", expand=True)
                for repo, lines in repos.items():
                    node = ver.add(repo, expand=True)
                    for line in lines:
                        node.add_leaf(Text(line, style="dim"))


class CraftStatusApp(App):
    """craftstatus, who's behind upstream?"""

    CSS = """
    #main {
        height: 1fr;
    }

    #repos {
        width: 2fr;
        border: solid $secondary;
    }

    #logs {
        width: 1fr;
        border: solid $secondary;
        display: none;
    }

    #status {
        height: 1;
        padding: 0 1;
        background: $boost;
    }
    """

    TITLE = "craftstatus"
    SUB_TITLE = "git status across SRC versions"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("i", "ignore", "Ignore repo"),
        Binding("u", "update", "Update repo"),
        Binding("l", "toggle_logs", "Logs"),
    ]

    def __init__(self, config: ScanConfig) -> None:
        super().__init__()
        self.config = config
        self.log_store = ScanLog()
        self.scanner = Scanner(config, observer=self.log_store)
        self.reports: list[VersionReport] = []

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main"):
            yield RepoTree("Git Status", id="repos")
            yield LogTree("Scan Logs", id="logs")
        yield Static("Checking repository status...", id="status")
        yield Footer()

    def on_mount(self) -> None:
        self.run_scan()

    @work(exclusive=True)
    async def run_scan(self) -> None:
        """Rescan every workspace on the app's event loop."""
        status = self.query_one("#status", Static)
        status.update("Checking repository status...")
        self.log_store.clear()
        self.reports = await self.scanner.scan_tree()

        stats = OverallStats()
        for report in self.reports:
            for repo in report.repositories:
                stats.add(repo.status)

        self.query_one(RepoTree).update_data(self.reports)
        self.query_one(LogTree).update_data(self.log_store.as_dict())
        status.update(status_line(stats))

    def _selected_repo(self) -> Optional[Repository]:
        node = self.query_one(RepoTree).cursor_node
        if node is None or not isinstance(node.data, Repository):
            return None
        return node.data

    def action_toggle_logs(self) -> None:
        logs = self.query_one(LogTree)
        logs.display = not logs.display

    def action_refresh(self) -> None:
        self.scanner.clear_cache()
        self.run_scan()

    def action_ignore(self) -> None:
        repo = self._selected_repo()
        if repo is None:
            self.notify("Select a repository first", severity="warning")
            return
        try:
            added = add_to_ignore(repo.path, self.config.ignore_file)
        except (OSError, UnicodeDecodeError) as e:
            self.notify(f"Failed to update .craftignore: {e}", severity="error")
            return
        if added:
            self.notify(f"Added {repo.name} to .craftignore")
            self.run_scan()
        else:
            self.notify(f"{repo.name} is already in .craftignore")

    def action_update(self) -> None:
        repo = self._selected_repo()
        if repo is None:
            self.notify("Select a repository first", severity="warning")
            return
        self.run_update(repo)

    @work(exclusive=True, group="update")
    async def run_update(self, repo: Repository) -> None:
        async def ask() -> DirtyAction:
            return await self.push_screen_wait(DirtyPrompt())

        status = self.query_one("#status", Static)
        try:
            result = await update_repository(
                repo.path,
                on_dirty=ask,
                progress=lambda msg: status.update(f"{repo.name}: {msg}"),
            )
        except (GitError, OSError) as e:
            self.notify(f"Failed to update repository: {e}", severity="error")
            return

        if result is UpdateResult.CANCELLED:
            self.notify("Update cancelled")
            return
        if result is UpdateResult.UP_TO_DATE:
            self.notify("Repository is already up to date")
        else:
            self.notify("Repository updated successfully")
        self.scanner.cache.discard(repo.path)
        self.run_scan()


def run_tui(config: ScanConfig) -> None:
    """Launch the craftstatus TUI."""
    app = CraftStatusApp(config)
    app.run()
