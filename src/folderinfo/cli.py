"""Command-line interface for folderinfo: print the crate tree of a directory as text, DOT or JSON."""

from __future__ import annotations

import argparse
import logging
import shutil
import subprocess
import sys
from pathlib import Path

from folderinfo import __version__
from folderinfo.api import build_tree, format_dot, format_json, format_text
from folderinfo.core.errors import FolderInfoError
from folderinfo.core.manifest import DEFAULT_MANIFEST_NAME

logger = logging.getLogger(__name__)


def _split_list(value: str | None) -> list[str]:
    """Split a comma-separated option into its non-empty entries, keeping order."""
    if not value:
        return []
    return [item for item in value.split(",") if item]


# Options whose comma-separated rules may start with "-".
LIST_OPTIONS = ("--ignore", "--highlight")


def _attach_list_values(argv: list[str]) -> list[str]:
    """Join "--highlight -lib" into "--highlight=-lib" so argparse keeps the value."""
    joined: list[str] = []
    i = 0
    while i < len(argv):
        if argv[i] in LIST_OPTIONS and i + 1 < len(argv):
            joined.append(f"{argv[i]}={argv[i + 1]}")
            i += 2
        else:
            joined.append(argv[i])
            i += 1
    return joined


def _check_graphviz() -> bool:
    """Check if Graphviz (dot) is available."""
    return shutil.which("dot") is not None


def _render_dot(dot_content: str, output_path: Path, format: str) -> bool:
    """Render DOT content to an image file using Graphviz."""
    if not _check_graphviz():
        print(
            "Error: Graphviz not found. Install it with:\n"
            "  Ubuntu/Debian: sudo apt install graphviz\n"
            "  macOS: brew install graphviz\n"
            "  Or download from: https://graphviz.org/download/",
            file=sys.stderr,
        )
        return False

    try:
        result = subprocess.run(
            ["dot", f"-T{format}", "-o", str(output_path)],
            input=dot_content,
            capture_output=True,
            text=True,
            timeout=60,
        )
    except subprocess.TimeoutExpired:
        print("Error: Graphviz timed out (graph may be too large)", file=sys.stderr)
        return False
    except OSError as e:
        print(f"Error running Graphviz: {e}", file=sys.stderr)
        return False
    if result.returncode != 0:
        print(f"Graphviz error: {result.stderr}", file=sys.stderr)
        return False
    return True


def cmd_report(args: argparse.Namespace) -> int:
    """Build the crate tree and write it in the requested format."""
    root = Path(args.path)
    try:
        tree = build_tree(
            root,
            manifest_name=args.manifest,
            strict_names=not args.allow_unnamed,
        )
    except (FolderInfoError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if tree is None:
        print(f"Error: Cannot process folder {root}: no {args.manifest} found", file=sys.stderr)
        return 1

    if getattr(args, "tui", False):
        from folderinfo.tui.app import FolderInfoApp

        FolderInfoApp(tree).run()
        return 0

    ignore = _split_list(args.ignore)
    highlight = _split_list(args.highlight)
    if args.format != "dot" and (ignore or highlight):
        logger.warning("--ignore and --highlight only apply to --format dot")
    if args.render and args.format != "dot":
        print("Error: --render only works with --format dot", file=sys.stderr)
        return 1

    if args.format == "dot":
        output = format_dot(tree, ignore=ignore, highlight=highlight)
    elif args.format == "json":
        output = format_json(tree)
    else:
        output = format_text(tree)

    if args.render:
        out_path = Path(args.output) if args.output else Path(f"{tree.name or 'crates'}.{args.render}")
        print(f"Rendering graph to {out_path}...", file=sys.stderr)
        if not _render_dot(output, out_path, args.render):
            return 1
        print(f"Graph image saved to: {out_path}", file=sys.stderr)
        return 0

    if args.output:
        Path(args.output).write_text(output + "\n")
        print(f"Output written to: {args.output}", file=sys.stderr)
    else:
        print(output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="folderinfo",
        description="Show the crates found under a directory and the dependencies between them.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory to inspect (default: current directory)",
    )
    parser.add_argument(
        "-f",
        "--format",
        type=str.lower,
        choices=["text", "dot", "json"],
        default="text",
        help="Output format: text report, dot (Graphviz) or json (default: text)",
    )
    parser.add_argument(
        "--ignore",
        metavar="CRATES",
        help="Comma-separated list of crates whose edges are left out (dot only)",
    )
    parser.add_argument(
        "--highlight",
        metavar="RULES",
        help="Comma-separated list of crates to highlight: name (any direction), +from, -to (dot only)",
    )
    parser.add_argument(
        "--manifest",
        default=DEFAULT_MANIFEST_NAME,
        metavar="NAME",
        help=f"Manifest file name looked up in each directory (default: {DEFAULT_MANIFEST_NAME})",
    )
    parser.add_argument(
        "--allow-unnamed",
        action="store_true",
        help="Keep crates whose manifest has no package name instead of failing",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "--render",
        choices=["png", "svg", "pdf"],
        metavar="FORMAT",
        help="Render the dot output to an image (png, svg, pdf). Requires Graphviz installed.",
    )
    parser.add_argument(
        "--tui",
        action="store_true",
        help="Browse the crate tree in the interactive terminal UI",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every directory visited to stderr",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the folderinfo CLI."""
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(_attach_list_values(argv))
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    return cmd_report(args)


if __name__ == "__main__":
    sys.exit(main())
