"""Textual TUI for browsing a crate tree."""

from __future__ import annotations

from typing import Any

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Input, Static, Tree
from textual.widgets.tree import TreeNode

from folderinfo.core.text import NO_DESCRIPTION
from folderinfo.core.tree import Project, collect_crate_names

COLOR_HEADER = "bold magenta"
COLOR_CRATE = "white"
COLOR_INTERNAL = "bold green"
COLOR_EXTERNAL = "bold yellow"
COLOR_STATS = "cyan"
COLOR_FOLDER = "dim"


def _node_stats(node: Project) -> tuple[int, int, int]:
    """Return (direct_children, total_descendants, max_depth) for a node."""
    direct = len(node.children)
    total = 0
    max_d = 0
    for c in node.children:
        _, sub_total, sub_depth = _node_stats(c)
        total += 1 + sub_total
        max_d = max(max_d, 1 + sub_depth)
    return direct, total, max_d


def _node_label(node: Project) -> str:
    """Tree label: folder and crate name, escaped for Rich markup."""
    folder = escape(node.folder or ".")
    name = escape(f"[{node.name or ''}]")
    return f"[{COLOR_FOLDER}]{folder}[/] - [{COLOR_CRATE}]{name}[/]"


def _split_dependencies(node: Project, crates: set[str]) -> tuple[list[str], list[str]]:
    internal = [d for d in node.dependencies if d in crates]
    external = [d for d in node.dependencies if d not in crates]
    return internal, external


def _format_details(node: Project, crates: set[str]) -> str:
    """Markup for the details panel of one crate."""
    direct, total, max_depth = _node_stats(node)
    internal, external = _split_dependencies(node, crates)
    lines = [
        f"[{COLOR_HEADER}]Crate[/]",
        f"  [{COLOR_CRATE}]{escape(node.name or '(unnamed)')}[/]  [{COLOR_FOLDER}]{escape(node.folder or '.')}[/]",
        "",
        f"[{COLOR_HEADER}]Description[/]",
        f"  {escape(NO_DESCRIPTION if node.description is None else node.description)}",
        "",
        f"[{COLOR_HEADER}]Dependencies[/]",
        f"  [{COLOR_INTERNAL}]<[/] {escape(', '.join(internal)) or '[dim]none[/]'}",
        f"  [{COLOR_EXTERNAL}]>[/] {escape(', '.join(external)) or '[dim]none[/]'}",
        "",
        f"[{COLOR_HEADER}]Stats[/]",
        f"  Nested crates:        [{COLOR_STATS}]{direct}[/]",
        f"  Total descendants:    [{COLOR_STATS}]{total}[/]",
        f"  Max depth from here:  [{COLOR_STATS}]{max_depth}[/] [dim]levels[/]",
    ]
    return "\n".join(lines)


def _matches(node: Project, query: str) -> bool:
    """Case-insensitive substring match on crate name or folder."""
    query = query.lower()
    return query in (node.name or "").lower() or query in node.folder.lower()


def _populate_textual_tree(tn: TreeNode, node: Project) -> None:
    """Recursively add Project children under a textual tree node."""
    for child in node.children:
        if child.children:
            child_tn = tn.add(_node_label(child), data=child, expand=False)
            _populate_textual_tree(child_tn, child)
        else:
            tn.add_leaf(_node_label(child), data=child)


class SearchScreen(ModalScreen[str | None]):
    """Modal to search for crates in the tree. Keyboard-only."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    DEFAULT_CSS = """
    SearchScreen {
        align: center middle;
        padding: 2 4;
    }
    SearchScreen #search_title {
        text-align: center;
        padding-bottom: 1;
    }
    SearchScreen #search_input {
        width: 60;
        margin: 1 0;
    }
    SearchScreen #search_hint {
        text-align: center;
        padding-top: 1;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(
                "[bold cyan]Search[/]\n\nType a crate or folder name, or part of one.",
                id="search_title",
                markup=True,
            )
            yield Input(placeholder="crate name...", id="search_input")
            yield Static(
                "[dim]Enter[/] = Search  ·  [dim]Escape[/] = Cancel\n"
                "[dim]After search: [bold]n[/bold] = next match, [bold]N[/bold] = previous[/]",
                id="search_hint",
                markup=True,
            )

    def on_mount(self) -> None:
        self.query_one("#search_input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        value = event.value.strip()
        self.dismiss(value if value else None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class FolderInfoApp(App[None]):
    """Terminal UI to explore the crates of a directory tree."""

    TITLE = "folderinfo"
    BINDINGS = [
        Binding("/", "search", "Search"),
        Binding("n", "next_match", "Next match", show=False),
        Binding("N", "prev_match", "Prev match", show=False),
        Binding("d", "toggle_details", "Details"),
        Binding("e", "expand_all", "Expand all"),
        Binding("c", "collapse_all", "Collapse"),
        Binding("q", "quit", "Quit"),
    ]

    DEFAULT_CSS = """
    #details {
        padding: 1 2;
        border: solid $primary;
        height: auto;
        min-height: 8;
    }
    """

    def __init__(self, root: Project, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._root = root
        self._crates = collect_crate_names(root)
        self._search_matches: list[TreeNode] = []
        self._search_index: int = 0
        self._details_visible: bool = True

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Container(id="main_container"):
            yield Tree(_node_label(self._root), data=self._root, id="crate_tree")
            yield Static(
                "[dim]↑/↓[/] move  ·  [dim]Enter[/]/[dim]Space[/] select  ·  [dim]/[/] search",
                id="details",
            )
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = "Crate Tree Explorer"
        tree = self.query_one("#crate_tree", Tree)
        _populate_textual_tree(tree.root, self._root)
        tree.root.expand()
        tree.focus()
        self._set_details(_format_details(self._root, self._crates))

    def _set_details(self, text: str) -> None:
        self.query_one("#details", Static).update(text)

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        node = event.node.data
        if isinstance(node, Project):
            self._set_details(_format_details(node, self._crates))

    def action_expand_all(self) -> None:
        self.query_one("#crate_tree", Tree).root.expand_all()

    def action_collapse_all(self) -> None:
        root = self.query_one("#crate_tree", Tree).root
        root.collapse_all()
        root.expand()

    def action_search(self) -> None:
        """Open search modal."""
        self.push_screen(SearchScreen(), self._on_search_done)

    def _on_search_done(self, query: str | None) -> None:
        if not query:
            return
        self._search_matches = []
        self._search_index = 0
        self._collect_matches(self.query_one("#crate_tree", Tree).root, query)

        if not self._search_matches:
            self.notify(f"No matches for '{query}'", severity="warning", timeout=2)
            return
        self.notify(
            f"Found {len(self._search_matches)} match(es) for '{query}'",
            severity="information",
            timeout=2,
        )
        self._goto_match(0)

    def _collect_matches(self, node: TreeNode, query: str) -> None:
        """Recursively collect tree nodes whose crate matches the query."""
        if isinstance(node.data, Project) and _matches(node.data, query):
            self._search_matches.append(node)
        for child in node.children:
            self._collect_matches(child, query)

    def _goto_match(self, index: int) -> None:
        """Navigate to and select a specific match."""
        if not self._search_matches:
            return
        self._search_index = index % len(self._search_matches)
        match_node = self._search_matches[self._search_index]

        parent = match_node.parent
        while parent is not None:
            parent.expand()
            parent = parent.parent

        tree = self.query_one("#crate_tree", Tree)
        tree.select_node(match_node)
        tree.scroll_to_node(match_node)
        self._set_details(_format_details(match_node.data, self._crates))

    def action_next_match(self) -> None:
        """Go to next search match."""
        if not self._search_matches:
            self.notify("No active search. Press / to search.", severity="information", timeout=2)
            return
        self._goto_match(self._search_index + 1)

    def action_prev_match(self) -> None:
        """Go to previous search match."""
        if not self._search_matches:
            self.notify("No active search. Press / to search.", severity="information", timeout=2)
            return
        self._goto_match(self._search_index - 1)

    def action_toggle_details(self) -> None:
        """Toggle visibility of the details panel."""
        self._details_visible = not self._details_visible
        details = self.query_one("#details", Static)
        details.styles.display = "block" if self._details_visible else "none"

    def action_quit(self) -> None:
        self.exit()
