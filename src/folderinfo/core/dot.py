"""Graphviz (DOT) rendering of the dependencies between crates of one tree."""

from __future__ import annotations

from collections.abc import Iterable

from folderinfo.core.tree import Project, collect_crate_names


def _cluster_id(name: str) -> str:
    """Cluster ids are bare DOT identifiers, so '-' is not allowed."""
    return name.replace("-", "_")


def edge_color(source: str, target: str, highlight: Iterable[str]) -> str:
    """
    Pick the color for an edge; the first matching rule wins.

    "+X" colors edges leaving X blue, "-X" colors edges entering X red and a
    bare "X" colors any edge touching X black. Unmatched edges are transparent.
    """
    for rule in highlight:
        if rule.startswith("+") and source == rule[1:]:
            return "blue"
        elif rule.startswith("-") and target == rule[1:]:
            return "red"
        elif rule in (source, target):
            return "black"
    return "transparent"


def _render_clusters(node: Project, out: list[str]) -> None:
    name = node.name or ""
    if node.children:
        out.append(f"subgraph cluster_{_cluster_id(name)} {{")
        out.append(f'label="{name}"')
    out.append(f'"{name}"')
    for child in node.children:
        _render_clusters(child, out)
    if node.children:
        out.append("}")


def _render_edges(
    node: Project,
    crates: set[str],
    ignore: set[str],
    highlight: list[str],
    out: list[str],
) -> None:
    source = node.name or ""
    child_names = {c.name for c in node.children}
    for target in node.dependencies:
        if target not in crates:
            continue
        if source in ignore or target in ignore:
            continue
        if target in child_names:
            continue
        line = f'"{source}" -> "{target}"'
        if highlight:
            line += f" [color={edge_color(source, target, highlight)}]"
        out.append(line)
    for child in node.children:
        _render_edges(child, crates, ignore, highlight, out)


def render_dot(
    root: Project,
    *,
    ignore: Iterable[str] = (),
    highlight: Iterable[str] = (),
) -> list[str]:
    """
    Render the tree as a DOT digraph.

    Crates with nested crates become clusters. One edge is drawn per internal
    dependency, except edges touching an ignored crate and edges to a direct
    child (already shown by the cluster).

    Args:
        root: Tree to render.
        ignore: Crate names whose edges are dropped.
        highlight: Ordered coloring rules ("+from", "-to" or "name"). When
            empty, edges carry no color attribute.

    Returns:
        DOT source, one string per line.
    """
    crates = collect_crate_names(root)
    rules = list(dict.fromkeys(highlight))
    lines = ["digraph G {"]
    _render_clusters(root, lines)
    _render_edges(root, crates, set(ignore), rules, lines)
    lines.append("}")
    return lines
