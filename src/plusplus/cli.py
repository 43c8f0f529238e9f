"""Command-line interface for the ++ compiler."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from plusplus import __version__
from plusplus.errors import TokenizerError

DEFAULT_EXTENSION = "js"
TITLE = f"plusplus (v{__version__}), a ++ to JavaScript compiler"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="pp",
        description="Compile ++ source into JavaScript",
    )
    p.add_argument("input", nargs="?", help="Input .pp file")
    p.add_argument("-o", "--output", help="Output file (default: input with .js suffix)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover pp.toml)",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "pp.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def default_output_path(input_file: Path, extension: str, directory: Path | None) -> Path:
    """Sibling of the input with the same stem and the target extension."""
    name = input_file.with_suffix("." + extension.lstrip(".")).name
    parent = directory if directory is not None else input_file.parent
    return parent / name


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    extension = DEFAULT_EXTENSION
    directory: Path | None = None
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_ext = cfg_output.get("extension")
        if isinstance(cfg_ext, str) and cfg_ext.strip("."):
            extension = cfg_ext
        cfg_dir = cfg_output.get("directory")
        if isinstance(cfg_dir, str):
            directory = Path(cfg_dir)
            if not directory.is_absolute():
                directory = input_dir / directory

    if args.output:
        output_file = Path(args.output)
    else:
        output_file = default_output_path(input_file, extension, directory)

    debug = False
    cfg_debug = config.get("debug")
    if isinstance(cfg_debug, dict) and isinstance(cfg_debug.get("tokens"), bool):
        debug = cfg_debug["tokens"]
    if args.debug:
        debug = True

    return CliOptions(input_file=input_file, output_file=output_file, debug=debug)


def compile_file(options: CliOptions) -> list[str]:
    """Open, tokenize, and compile a ++ file, returning the JavaScript lines."""
    from plusplus.compiler import Compiler
    from plusplus.debug import dump_pending, dump_statement
    from plusplus.tokenizer import Tokenizer

    with Tokenizer.open(options.input_file) as tokenizer:
        if options.debug:
            compiler = Compiler(tokenizer, lambda stmt: dump_statement(tokenizer, stmt))
        else:
            compiler = Compiler(tokenizer)
        lines = compiler.compile()
        if options.debug:
            dump_pending(tokenizer)
    return lines


def write_output(path: Path, lines: list[str]) -> None:
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")


def print_long_info(parser: argparse.ArgumentParser) -> None:
    print(TITLE)
    parser.print_usage()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.input is None:
        print_long_info(parser)
        return 0

    try:
        options = resolve_options(args)
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return 2

    try:
        lines = compile_file(options)
    except TokenizerError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    try:
        write_output(options.output_file, lines)
    except OSError as exc:
        print(f"error: could not write {options.output_file}: {exc}", file=sys.stderr)
        return 1

    print(f"Compiled {options.input_file} -> {options.output_file}", file=sys.stderr)
    return 0
