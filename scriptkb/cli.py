"""Console entry points: cbe, thinker and clipwatch."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional, TextIO

from .commit import NAMING_SCHEMES, plan_block_files, write_files
from .errors import ScriptKBError
from .extract import extract_code_blocks, extract_think_tags
from .repository import central_repo_path
from .utils.gitignore import get_gitignore
from .watch import ClipEvent, ClipWatcher

logger = logging.getLogger("scriptkb")


class HelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Formatter that preserves description whitespace and widens help columns."""

    def __init__(self, prog, **kwargs):
        kwargs.setdefault("max_help_position", 40)
        super().__init__(prog, **kwargs)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def _read_input(file_path: Optional[str], stdin: TextIO, prompt: Optional[str] = None) -> str:
    """Read all of `file_path` when it exists, otherwise drain standard input."""
    if file_path and os.path.isfile(file_path):
        with open(file_path, encoding="utf-8", errors="replace", newline="") as f:
            return f.read()
    if file_path:
        logger.warning(f"Input file '{file_path}' not found; reading standard input")
    if prompt and stdin.isatty():
        print(prompt, file=sys.stderr)
    return stdin.read()


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug detail to stderr")


def _add_repo_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--no-mirror",
        dest="mirror",
        action="store_false",
        help="Do not copy written files into the central repository",
    )
    parser.add_argument(
        "--repo-dir",
        metavar="DIR",
        help="Central repository directory (default: $SCRIPT_KB_REPO or ~/.script_kb/llm_code)",
    )


# ---------------------------------------------------------------- cbe


def build_cbe_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cbe",
        description=(
            "Extract ``` fenced code blocks into files.\n\n"
            "A block is named by a 'filename: x' line just before its opening fence,\n"
            "or by a '// filename: x' / '# filename: x' comment as its first line\n"
            "(the comment wins and is removed). Unnamed blocks get generated names."
        ),
        formatter_class=HelpFormatter,
    )
    parser.add_argument("file", nargs="?", help="Input file (default: standard input)")
    parser.add_argument(
        "--ignore-relative",
        action="store_true",
        help="Drop directory parts of block file names and write into the current directory",
    )
    parser.add_argument(
        "--naming",
        choices=NAMING_SCHEMES,
        default="unnamed",
        help="Names for blocks without a file name (default: unnamed)",
    )
    parser.add_argument(
        "--respect-gitignore",
        action="store_true",
        help="Skip blocks whose destination matches the working directory's .gitignore",
    )
    parser.add_argument("--dry-run", action="store_true", help="Show what would be written")
    _add_repo_options(parser)
    _add_common(parser)
    return parser


def cbe_main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None) -> int:
    args = build_cbe_parser().parse_args(argv)
    _configure_logging(args.verbose)

    text = _read_input(args.file, stdin or sys.stdin)
    blocks = extract_code_blocks(text)
    if not blocks:
        print("No code blocks found.")
        return 0
    print(f"Found {len(blocks)} code block(s).")

    work_dir = os.getcwd()
    planned = plan_block_files(blocks, work_dir, ignore_relative=args.ignore_relative, naming=args.naming)
    ignore_spec = get_gitignore(work_dir) if args.respect_gitignore else None

    failures = 0
    for i, pf in enumerate(planned, start=1):
        summary = write_files(
            [pf],
            mirror=args.mirror,
            repo_dir=args.repo_dir,
            dry_run=args.dry_run,
            ignore_spec=ignore_spec,
            ignore_root=work_dir,
            logger=logger,
        )
        if summary.skipped:
            print(f"Skipped code block #{i}: {pf.path} is ignored")
        elif summary.failed:
            failures += 1
            print(f"Failed to save code block #{i}: {summary.errors[pf.path]}")
        elif args.dry_run:
            print(f"Would save code block #{i} to: {pf.path}")
        else:
            print(f"Saved code block #{i} to: {pf.path}")
            if summary.mirrored:
                print(f"Copied to central repo: {os.path.dirname(summary.mirrored[0])}")
    return 1 if failures else 0


# ---------------------------------------------------------------- thinker


def build_thinker_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="thinker",
        description="Extract <think>...</think> sections into think-NN.txt files.",
        formatter_class=HelpFormatter,
    )
    parser.add_argument("file", nargs="?", help="Input file (default: standard input)")
    parser.add_argument("--dir", default=".", help="Directory for think-NN.txt files (default: .)")
    parser.add_argument("-o", "--output", metavar="FILE", help="Also write the text with sections removed")
    _add_common(parser)
    return parser


def _write_text(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def thinker_main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None) -> int:
    args = build_thinker_parser().parse_args(argv)
    _configure_logging(args.verbose)

    text = _read_input(
        args.file,
        stdin or sys.stdin,
        prompt="Reading input from standard input. (End with Ctrl+Z [Windows] or Ctrl+D [Unix])",
    )
    result = extract_think_tags(text)

    failures = 0
    if args.output:
        try:
            _write_text(args.output, result.text)
            logger.debug(f"Wrote stripped text to {args.output}")
        except OSError as e:
            failures += 1
            print(f"Failed to save stripped text to {args.output}: {e}")

    if not result.thinks:
        print("No <think> sections found.")
        return 1 if failures else 0

    print(f"Extracted {len(result.thinks)} <think> section(s).")
    out_dir = os.path.abspath(args.dir)
    try:
        os.makedirs(out_dir, exist_ok=True)
    except OSError as e:
        print(f"Failed to create output directory {out_dir}: {e}")
        return 1

    for i, body in enumerate(result.thinks, start=1):
        path = os.path.join(out_dir, f"think-{i:02d}.txt")
        try:
            _write_text(path, body)
        except OSError as e:
            failures += 1
            print(f"Failed to save <think> section #{i}: {e}")
            continue
        print(f"Saved <think> section #{i} to: {path}")
    return 1 if failures else 0


# ---------------------------------------------------------------- clipwatch


def build_clipwatch_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clipwatch",
        description=(
            "Watch the clipboard and save what is copied.\n\n"
            "Copy a bare file name first to choose where the next copied text goes;\n"
            "otherwise text is saved to unnamed-file-N.txt in the current directory."
        ),
        formatter_class=HelpFormatter,
    )
    parser.add_argument("--interval", type=float, default=1.0, help="Seconds between polls (default: 1.0)")
    _add_repo_options(parser)
    _add_common(parser)
    return parser


_EVENT_MESSAGES = {
    "create": "Created file: {path}",
    "touch": "Updated timestamp of: {path}",
    "write": "Wrote clipboard content to: {path}",
    "write_new": "Wrote clipboard content to new file: {path}",
}


def _print_event(event: ClipEvent) -> None:
    print(_EVENT_MESSAGES[event.kind].format(path=event.path))
    if event.mirrored:
        print(f"Copied to central repo: {os.path.dirname(event.mirrored)}")


def clipwatch_main(argv: Optional[List[str]] = None, max_polls: Optional[int] = None) -> int:
    parser = build_clipwatch_parser()
    args = parser.parse_args(argv)
    if args.interval <= 0:
        parser.error("--interval must be positive")
    _configure_logging(args.verbose)

    if args.mirror:
        try:
            central_repo_path(repo_dir=args.repo_dir)
        except ScriptKBError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    watcher = ClipWatcher(
        os.getcwd(),
        mirror=args.mirror,
        repo_dir=args.repo_dir,
        interval=args.interval,
        logger=logging.getLogger("scriptkb.watch"),
    )
    print("Starting clipboard watcher. Press Ctrl+C to exit.")
    watcher.run(max_polls=max_polls, on_event=_print_event)
    return 0


def _entry(main) -> None:
    sys.exit(main())


def cbe() -> None:
    _entry(cbe_main)


def thinker() -> None:
    _entry(thinker_main)


def clipwatch() -> None:
    _entry(clipwatch_main)
