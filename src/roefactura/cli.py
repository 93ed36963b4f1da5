"""Command line entry points for the RO e-Factura validator."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Sequence

from .commands import summary, validate

CommandCallable = Callable[[list[str] | None], int | None]

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Attach a stderr handler to the ``roefactura`` logger (once)."""

    logger = logging.getLogger("roefactura")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


@dataclass(frozen=True)
class CommandSpec:
    """Metadata describing a CLI command exposed by :mod:`roefactura.cli`."""

    name: str
    summary: str
    handler: CommandCallable
    module: str

    def run(self, argv: list[str] | None) -> int:
        """Execute the command and normalise the resulting exit code."""

        try:
            result = self.handler(argv)
        except SystemExit as exc:  # argparse exits on --help and usage errors
            code = exc.code
            if code is None:
                return 0
            if isinstance(code, int):
                return code
            print(str(code), file=sys.stderr)
            return 1
        if result is None:
            return 0
        return int(result)


_COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        name="validate",
        summary="Validate UBL invoices against the EN16931 and RO_CIUS rules.",
        handler=validate.main,
        module="roefactura.commands.validate",
    ),
    CommandSpec(
        name="summary",
        summary="Show the processing summary of UBL invoices.",
        handler=summary.main,
        module="roefactura.commands.summary",
    ),
)

_COMMAND_INDEX: Mapping[str, CommandSpec] = {spec.name: spec for spec in _COMMANDS}


def available_commands() -> Iterable[CommandSpec]:
    """Return the commands registered in the CLI."""

    return _COMMANDS


def build_parser() -> argparse.ArgumentParser:
    """Return the base argument parser shared across commands."""

    parser = argparse.ArgumentParser(prog="roefactura", description="RO e-Factura tools")
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    for spec in _COMMANDS:
        subparser = subparsers.add_parser(
            spec.name,
            help=spec.summary,
            description=spec.summary,
            add_help=False,
        )
        subparser.add_argument("args", nargs=argparse.REMAINDER, help=argparse.SUPPRESS)

    return parser


def _normalise_args(namespace: argparse.Namespace) -> tuple[str, list[str]]:
    command = getattr(namespace, "command")
    remainder = getattr(namespace, "args", [])
    return command, list(remainder)


def run(command: str, argv: Sequence[str] | None = None) -> int:
    """Execute *command* forwarding ``argv`` to the underlying handler."""

    spec = _COMMAND_INDEX.get(command)
    if spec is None:
        raise ValueError(f"Unknown command: {command}")
    return spec.run(list(argv or []))


def main(argv: Sequence[str] | None = None) -> int:
    """Execute the command line interface."""

    parser = build_parser()
    namespace, extras = parser.parse_known_args(argv)
    command, remainder = _normalise_args(namespace)

    forwarded = remainder + extras
    if forwarded and forwarded[0] in {"-h", "--help"}:
        return run(command, ["--help"])

    return run(command, forwarded)


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
