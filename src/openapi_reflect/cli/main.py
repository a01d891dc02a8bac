# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the openapi-reflect command-line interface."""

import argparse
import importlib
import logging
import sys
from pathlib import Path

from openapi_reflect.api.api import API
from openapi_reflect.config.config import CONFIG_FILE_NAME, ApiConfig, OutputFormat, load_api_config
from openapi_reflect.errors import ApiConfigError, OpenAPIReflectError

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the openapi-reflect CLI."""
    parser = argparse.ArgumentParser(
        prog="openapi-reflect",
        description="openapi-reflect: OpenAPI 3.0 documents from Python types",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log reflection and assembly details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Write the OpenAPI document of an API",
        description="Import an API declaration and write its OpenAPI 3.0 document.",
    )
    _add_target_argument(generate_parser)
    generate_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Configuration file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )
    generate_parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=None,
        help="Output encoding (default: from the configuration, else json)",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="File to write the document to (default: standard output)",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check that an API produces a valid document",
        description="Import an API declaration, generate its document and validate it.",
    )
    _add_target_argument(check_parser)
    check_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Configuration file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


class _TargetError(Exception):
    """Raised when a TARGET argument does not name an API."""


def _add_target_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "target",
        metavar="TARGET",
        help="API to document, as 'module:attribute'; the attribute is an API or a function returning one",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "check":
        return _cmd_check(args)
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    try:
        api = _load_target(args.target)
        config = _load_config(args.config)
    except (_TargetError, ApiConfigError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    config.apply(api)
    output_format = OutputFormat(args.format) if args.format else config.output_format

    try:
        document = api.spec()
    except OpenAPIReflectError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if output_format is OutputFormat.YAML:
        text = document.to_yaml()
    else:
        text = document.to_json(indent=2) + "\n"

    if args.output is None:
        sys.stdout.write(text)
        return 0

    try:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text, encoding="utf-8")
    except OSError as exc:
        print(f"Error: cannot write '{args.output}': {exc}", file=sys.stderr)
        return 1
    print(f"Wrote {output_format.value} document to '{args.output}'.", file=sys.stderr)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    try:
        api = _load_target(args.target)
        config = _load_config(args.config)
    except (_TargetError, ApiConfigError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    config.apply(api)
    try:
        document = api.spec()
    except OpenAPIReflectError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    operations = sum(len(item.operations) for item in document.paths.values())
    print(
        f"Checked {operations} operation(s) and {len(document.components.schemas)} schema(s). No issues found."
    )
    return 0


def _load_config(path: Path | None) -> ApiConfig:
    """Load the configuration, falling back to the default file and then to defaults."""
    if path is not None:
        return load_api_config(path)
    default = Path.cwd() / CONFIG_FILE_NAME
    if default.exists():
        return load_api_config(default)
    return ApiConfig()


def _load_target(target: str) -> API:
    """Import ``module:attribute`` and return the API it names."""
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise _TargetError(f"target '{target}' must have the form 'module:attribute'")

    # Targets are usually modules of the project in the current directory.
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        obj: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise _TargetError(f"cannot import module '{module_name}': {exc}") from exc

    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise _TargetError(f"module '{module_name}' has no attribute '{attribute}'") from None

    if not isinstance(obj, API) and callable(obj):
        obj = obj()
    if not isinstance(obj, API):
        raise _TargetError(f"'{target}' is not an API (got {type(obj).__name__})")
    return obj
