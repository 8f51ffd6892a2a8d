"""Command line interface: ``contemplate <class> [project-name]``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from . import __version__
from .errors import ContemplateError
from .materialize import Materializer
from .registry import REGISTRY, TemplateDescriptor, supported_classes
from .resolver import resolve
from .sources import GitTemplateSource

LOGGER = logging.getLogger(__name__)

CARGO_SUBCOMMAND = "contemplate"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cargo contemplate",
        description="Create a starter project from a named template class",
    )
    parser.add_argument(
        "class_name",
        nargs="?",
        metavar="class",
        help=f"Template class to materialize ({', '.join(supported_classes())})",
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        metavar="project-name",
        help="Name of the directory to create (default: <class>-start)",
    )
    parser.add_argument(
        "-C",
        "--directory",
        type=Path,
        default=None,
        help="Create the project inside this directory instead of the current one",
    )
    parser.add_argument(
        "--remote",
        action="store_true",
        help="Fetch the class's upstream git repository instead of the bundled copy",
    )
    parser.add_argument("--ref", help="Branch or tag to check out with --remote")
    parser.add_argument("--list", action="store_true", help="List the supported template classes and exit")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (repeat for debug output)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def _strip_cargo_subcommand(argv: Sequence[str]) -> list[str]:
    # cargo runs `cargo-contemplate contemplate <args>`
    args = list(argv)
    if args and args[0] == CARGO_SUBCOMMAND:
        return args[1:]
    return args


def _handle_list() -> int:
    for name in supported_classes():
        description = REGISTRY[name].description
        print(f"{name:<32} {description}".rstrip())
    return 0


def _remote_descriptor(descriptor: TemplateDescriptor, ref: str | None) -> TemplateDescriptor:
    if descriptor.upstream is None:
        raise ContemplateError(f"template class '{descriptor.class_name}' has no upstream repository")
    return descriptor.model_copy(update={"source": GitTemplateSource(descriptor.upstream, ref=ref)})


def _handle_materialize(args: argparse.Namespace) -> int:
    descriptor = resolve(args.class_name)
    if args.remote:
        descriptor = _remote_descriptor(descriptor, args.ref)

    destination = Materializer().materialize(descriptor, args.project_name, base_dir=args.directory)
    print(f"Created {destination}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(_strip_cargo_subcommand(sys.argv[1:] if argv is None else argv))
    _configure_logging(args.verbose)

    if args.list:
        return _handle_list()
    if args.class_name is None:
        parser.error("the following arguments are required: class")
    if args.ref and not args.remote:
        parser.error("--ref requires --remote")

    try:
        return _handle_materialize(args)
    except ContemplateError as exc:
        LOGGER.debug("command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
