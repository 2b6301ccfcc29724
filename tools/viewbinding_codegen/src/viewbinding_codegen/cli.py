from __future__ import annotations

import argparse
import re
import sys
from dataclasses import dataclass
from pathlib import Path

from .collector import scan_ui_file
from .common import ViewBindingError, write_output
from .renderer import derive_base_name, output_file_name, render_header

TOOL_VERSION = "1.0.0"
UI_SUFFIX = ".ui"
APPLICATION_ID_PATTERN = re.compile(r"[a-zA-Z]\w+_\w+_\w+", re.ASCII)


@dataclass(frozen=True)
class GeneratorConfig:
    application_id: str
    directory: Path
    output_directory: Path


def resolve_config(args: argparse.Namespace) -> GeneratorConfig:
    application_id = args.application_id
    if not application_id:
        raise ViewBindingError("--application-id is required.")
    if not APPLICATION_ID_PATTERN.fullmatch(application_id):
        raise ViewBindingError(
            f"application-id '{application_id}' is not valid. It must be in the format com_example_AppName"
        )

    if not args.directory:
        raise ViewBindingError("--directory is required.")
    directory = Path(args.directory)
    if not directory.is_dir():
        raise ViewBindingError(f"--directory '{directory}' is not a valid directory.")

    if not args.output_directory:
        raise ViewBindingError("--output-directory is required.")
    output_directory = Path(args.output_directory)
    if output_directory.exists():
        if not output_directory.is_dir():
            raise ViewBindingError(f"--output-directory '{output_directory}' is not a valid directory.")
    else:
        try:
            output_directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ViewBindingError(f"could not create output directory '{output_directory}': {exc}") from exc

    return GeneratorConfig(
        application_id=application_id,
        directory=directory,
        output_directory=output_directory,
    )


def iter_ui_files(directory: Path) -> list[Path]:
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        raise ViewBindingError(f"Unable to scan directory '{directory}': {exc}") from exc
    return sorted((entry for entry in entries if entry.name.endswith(UI_SUFFIX)), key=lambda entry: entry.name)


def generate_for_file(path: Path, config: GeneratorConfig, *, check: bool = False, dry_run: bool = False) -> int:
    bindings = scan_ui_file(path)
    base_name = derive_base_name(path.name)
    content = render_header(base_name, bindings, config.application_id)
    out_path = config.output_directory / output_file_name(base_name)
    try:
        return write_output(out_path, content, check, dry_run)
    except OSError as exc:
        raise ViewBindingError(f"Error writing to file {out_path}: {exc}") from exc


def command_generate(args: argparse.Namespace) -> int:
    config = resolve_config(args)
    ui_files = iter_ui_files(config.directory)

    status = 0
    processed = 0
    for path in ui_files:
        try:
            status |= generate_for_file(path, config, check=args.check, dry_run=args.dry_run)
        except ViewBindingError as exc:
            # A broken file never stops the run and never changes the exit status.
            print(f"viewbinding warning: {exc}", file=sys.stderr)
            continue
        processed += 1

    action = "Checked" if args.check else "Generated"
    print(
        f"{action} {processed} of {len(ui_files)} view binding header(s) in '{config.output_directory}'.",
        file=sys.stderr,
    )
    return status


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="viewbinding",
        description="View Binding Code Generator: emit GTK template binding headers from .ui files.",
    )
    parser.add_argument("-a", "--application-id", required=True, metavar="ID", help="The application ID.")
    parser.add_argument(
        "-d",
        "--directory",
        required=True,
        metavar="DIR",
        help="The directory to scan for UI files.",
    )
    parser.add_argument(
        "-o",
        "--output-directory",
        required=True,
        metavar="DIR",
        help="The output directory for generated files (created if missing).",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Do not write; print a diff and exit 1 if any header is out of date.",
    )
    parser.add_argument("--dry-run", action="store_true", help="Render headers without writing them.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {TOOL_VERSION}")
    parser.set_defaults(func=command_generate)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except ViewBindingError as exc:
        print(f"viewbinding error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
