"""Indented text report of a crate tree."""

from __future__ import annotations

from folderinfo.core.tree import Project, collect_crate_names

LEGEND = [
    "dump format:",
    " <folder-name> - [<crate-name>] crate-description",
    "                 < internal dependencies",
    "                 > external dependencies",
    "",
]

RAIL = "   |"
MAX_WIDTH = 80
NO_DESCRIPTION = "<no desc>"


def wrap_words(text: str, width: int) -> list[str]:
    """
    Greedy word wrap on single spaces.

    Each word is counted with one trailing separator; a line is closed when the
    next word would push it past width. A word longer than width gets a line to
    itself and is never split. The last line is always returned.
    """
    lines: list[str] = []
    current = ""
    for word in text.split(" "):
        if current and len(current) + len(word) + 1 > width:
            lines.append(current.rstrip(" "))
            current = ""
        current += word + " "
    lines.append(current.rstrip(" "))
    return lines


def column_width(folder: str, depth: int) -> int:
    """Characters available for text on one line of a node at this depth."""
    return MAX_WIDTH - len(folder) + 3 + 4 * depth


def _render_node(node: Project, crates: set[str], depth: int, out: list[str]) -> None:
    margin = RAIL * depth
    folder_spaces = " " * len(node.folder)
    width = column_width(node.folder, depth)

    description = NO_DESCRIPTION if node.description is None else node.description
    header = f"[{node.name or ''}] {description}"
    for n, line in enumerate(wrap_words(header, width)):
        if n == 0:
            out.append(f"{margin}{node.folder} - {line}")
        else:
            out.append(f"{margin}{folder_spaces}   {line}")

    internal = [d for d in node.dependencies if d in crates]
    external = [d for d in node.dependencies if d not in crates]
    for marker, deps in (("<", internal), (">", external)):
        if not deps:
            continue
        for line in wrap_words(", ".join(deps), width):
            out.append(f"{margin}{folder_spaces}   {marker} {line}")

    for child in node.children:
        out.append(margin)
        _render_node(child, crates, depth + 1, out)


def render_text(root: Project) -> list[str]:
    """Render the legend followed by the whole tree, one string per output line."""
    crates = collect_crate_names(root)
    lines = list(LEGEND)
    _render_node(root, crates, 0, lines)
    return lines
