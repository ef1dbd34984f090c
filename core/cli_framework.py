"""Decorator-driven argparse wrapper shared by the command-line entry points.

Commands register with ``@app.command`` and collect their options from the
``@app.argument`` decorators stacked beneath them. Every program gets the
same global flags (``--verbose``, ``--quiet``, ``--output``) and the same
error-to-exit-code mapping.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .cli_errors import ExitCode, handle_error
from .cli_output import OutputConfig, OutputFormat, OutputWriter


CommandFunc = Callable[[argparse.Namespace], int]

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass
class Argument:
    name_or_flags: tuple
    kwargs: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CommandDef:
    name: str
    func: CommandFunc
    help: str = ""
    arguments: List[Argument] = field(default_factory=list)


class CLIApp:
    """A named program with subcommands.

    Example usage:
        app = CLIApp("schedule-grid", "Weekly schedule grid", version="0.1.0")

        @app.command("week", help="Show the week")
        @app.argument("--date", help="Reference date")
        def cmd_week(args):
            args._output.print(args.date)
            return 0
    """

    def __init__(self, name: str, description: str = "", *, version: Optional[str] = None):
        self.name = name
        self.description = description
        self.version = version
        self._commands: Dict[str, CommandDef] = {}
        self._pending_arguments: List[Argument] = []

    def command(self, name: str, *, help: str = "") -> Callable[[CommandFunc], CommandFunc]:
        """Register ``func`` as subcommand ``name`` with any pending arguments."""
        def decorator(func: CommandFunc) -> CommandFunc:
            # @argument decorators run bottom-up, so restore source order
            arguments = list(reversed(self._pending_arguments))
            self._pending_arguments.clear()
            self._commands[name] = CommandDef(name=name, func=func, help=help, arguments=arguments)
            return func
        return decorator

    def argument(self, *name_or_flags: str, **kwargs: Any) -> Callable[[CommandFunc], CommandFunc]:
        """Queue an option for the next ``@command``; place it below that decorator."""
        def decorator(func: CommandFunc) -> CommandFunc:
            self._pending_arguments.append(Argument(name_or_flags, kwargs))
            return func
        return decorator

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog=self.name,
            description=self.description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        if self.version:
            parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {self.version}")
        parser.add_argument("--verbose", "-v", action="store_true",
                            help="Enable debug logging and tracebacks")
        parser.add_argument("--quiet", "-q", action="store_true",
                            help="Suppress normal output")
        parser.add_argument("--output", "-o", choices=[f.value for f in OutputFormat],
                            default=OutputFormat.TEXT.value, help="Output format (default: text)")

        subparsers = parser.add_subparsers(dest="command", metavar="<command>")
        for cmd in self._commands.values():
            sub = subparsers.add_parser(cmd.name, help=cmd.help, description=cmd.help)
            for arg in cmd.arguments:
                sub.add_argument(*arg.name_or_flags, **arg.kwargs)
            sub.set_defaults(_cmd_func=cmd.func)
        return parser

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Parse ``argv``, dispatch to the chosen command and return its exit code."""
        parser = self.build_parser()
        args = parser.parse_args(argv)

        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format=LOG_FORMAT,
            stream=sys.stderr,
        )
        args._output = OutputWriter(OutputConfig(format=OutputFormat(args.output), quiet=args.quiet))

        cmd_func = getattr(args, "_cmd_func", None)
        if cmd_func is None:
            parser.print_help()
            return int(ExitCode.USAGE)

        try:
            return int(cmd_func(args))
        except (Exception, KeyboardInterrupt) as e:
            return handle_error(e, verbose=args.verbose)
