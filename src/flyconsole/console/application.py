# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Console application: a click group that wires commands to the container."""

from __future__ import annotations

import difflib
import logging
from collections.abc import Iterable, Sequence
from typing import Any

import click
from rich.console import Console
from rich.text import Text
from rich.traceback import Traceback

from flyconsole.console.command import Command
from flyconsole.console.commands.list_command import ListCommand
from flyconsole.console.output import OUTPUT_META_KEY, Output
from flyconsole.console.verbosity import Verbosity, verbosity_from_flags
from flyconsole.container.container import Container
from flyconsole.core.banner import BannerPrinter
from flyconsole.kernel.exceptions import CommandNotFoundException

logger = logging.getLogger(__name__)


class Application(click.Group):
    """Command registry and run loop.

    Every :class:`Command` added here receives the application's container
    before it is registered. Running with no command name falls back to
    ``default_command`` (``list``).
    """

    def __init__(
        self,
        container: Container,
        version: str,
        *,
        name: str = "flyconsole",
        banner: str | None = None,
        console: Console | None = None,
        error_console: Console | None = None,
        catch_exceptions: bool = True,
        default_command: str = "list",
    ) -> None:
        self._container = container
        self.version = version
        self.long_name = banner if banner is not None else self.get_logo()
        self.console = console or Console(highlight=False)
        self.error_console = error_console or Console(stderr=True, highlight=False)
        self.catch_exceptions = catch_exceptions
        self.default_command = default_command
        self._output: Output | None = None
        super().__init__(
            name=name,
            callback=self._configure_io,
            params=self._global_params(),
            invoke_without_command=True,
        )

        self.add(ListCommand())

    # -- registration ----------------------------------------------------------

    def add(self, command: click.Command) -> click.Command | None:
        """Register *command*, injecting the container first.

        Returns ``None`` when the command reports itself disabled.
        """
        if isinstance(command, Command):
            command.set_container(self._container)
            command.set_application(self)
            if not command.is_enabled():
                command.set_application(None)
                logger.debug("Command %s is disabled, skipping", command.name)
                return None
        self.add_command(command)
        return command

    def add_command(self, cmd: click.Command, name: str | None = None) -> None:
        if isinstance(cmd, Command):
            cmd.set_container(self._container)
            cmd.set_application(self)
        super().add_command(cmd, name)
        logger.debug("Registered command %s", name or cmd.name)

    def normalize_command(self, command: type | str) -> click.Command | None:
        """Build *command* through the container and register it."""
        return self.add(self._container.make(command))

    def normalize_commands(self, commands: Iterable[type | str]) -> None:
        for command in commands:
            self.normalize_command(command)

    def get_container(self) -> Container:
        return self._container

    # -- lookup ----------------------------------------------------------------

    def find(self, name: str) -> click.Command:
        command = self.commands.get(name)
        if command is None:
            raise CommandNotFoundException(
                name,
                difflib.get_close_matches(name, list(self.commands), n=5, cutoff=0.6),
            )
        return command

    def has(self, name: str) -> bool:
        return name in self.commands

    def all(self) -> dict[str, click.Command]:
        return dict(self.commands)

    # -- running ---------------------------------------------------------------

    def run(self, args: Sequence[str] | None = None) -> int:
        """Parse *args* (default: ``sys.argv[1:]``), dispatch, and return the exit status."""
        try:
            status = self.main(
                args=list(args) if args is not None else None,
                prog_name=self.name,
                standalone_mode=False,
            )
        except click.exceptions.Exit as exc:
            return exc.exit_code
        except click.ClickException as exc:
            exc.show(file=self.error_console.file)
            return exc.exit_code
        except click.exceptions.Abort:
            self.error_console.print("Aborted!", style="red")
            return 1
        except Exception as exc:
            if not self.catch_exceptions:
                raise
            logger.error("Command failed: %s: %s", type(exc).__name__, exc)
            self.render_exception(exc)
            return 1
        return status if isinstance(status, int) and not isinstance(status, bool) else 0

    def render_exception(self, exc: BaseException) -> None:
        """Print *exc*; the traceback is added from ``-v`` upwards."""
        console = self.error_console
        console.print()
        console.print(Text(f"  {type(exc).__name__}  ", style="bold white on red"))
        console.print(Text(str(exc)), soft_wrap=True)
        console.print()
        if self._output is not None and self._output.is_verbose():
            console.print(Traceback.from_exception(type(exc), exc, exc.__traceback__))

    @property
    def long_version(self) -> str:
        return f"{self.long_name}\n  version {self.version}"

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        self.console.print(self.long_version, markup=False, highlight=False)
        super().format_help(ctx, formatter)

    def create_output(
        self,
        verbosity: int = Verbosity.NORMAL,
        *,
        interactive: bool = True,
        decorated: bool = True,
    ) -> Output:
        console = self.console
        if not decorated:
            console = Console(
                file=self.console.file,
                width=self.console.width,
                color_system=None,
                highlight=False,
            )
        return Output(console, verbosity, interactive=interactive)

    def get_logo(self) -> str:
        return BannerPrinter(app_name="flyconsole").render()

    def _global_params(self) -> list[click.Parameter]:
        return [
            click.Option(["-q", "--quiet"], is_flag=True, help="Do not output any message."),
            click.Option(
                ["-v", "--verbose"],
                count=True,
                help="Increase the verbosity of messages: 1 for normal output, 2 for more verbose output and 3 for debug.",
            ),
            click.Option(
                ["-n", "--no-interaction", "no_interaction"],
                is_flag=True,
                help="Do not ask any interactive question.",
            ),
            click.Option(["--no-ansi", "no_ansi"], is_flag=True, help="Disable ANSI output."),
            click.Option(
                ["-V", "--version"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=self._print_version,
                help="Display this application version.",
            ),
        ]

    def _print_version(self, ctx: click.Context, param: click.Parameter, value: Any) -> None:
        if not value or ctx.resilient_parsing:
            return
        self.console.print(self.long_version, markup=False, highlight=False)
        ctx.exit()

    def _configure_io(
        self,
        quiet: bool = False,
        verbose: int = 0,
        no_interaction: bool = False,
        no_ansi: bool = False,
    ) -> int | None:
        ctx = click.get_current_context()
        self._output = self.create_output(
            verbosity_from_flags(quiet, verbose),
            interactive=not no_interaction,
            decorated=not no_ansi,
        )
        ctx.meta[OUTPUT_META_KEY] = self._output
        if ctx.invoked_subcommand is None:
            command = self.find(self.default_command)
            with command.make_context(self.default_command, [], parent=ctx) as sub_ctx:
                return command.invoke(sub_ctx)
        return None
