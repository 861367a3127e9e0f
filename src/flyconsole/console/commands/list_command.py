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
"""Built-in ``list`` command: the application's default command."""

from __future__ import annotations

from flyconsole.console.command import Command
from flyconsole.console.input import InputArgument, InputOption


class ListCommand(Command):
    """Lists registered commands, optionally restricted to a ``namespace:`` prefix."""

    name = "list"
    description = "List commands"
    help = (
        "The list command lists all commands. Pass a namespace to only list the "
        "commands named <namespace>:<command>; use --raw for a plain listing."
    )

    def get_arguments(self):
        return [InputArgument("namespace", InputArgument.OPTIONAL, "The namespace name")]

    def get_options(self):
        return [InputOption("raw", None, InputOption.VALUE_NONE, "To output raw command list")]

    def handle(self) -> int:
        application = self.get_application()
        namespace = self.argument("namespace")
        prefix = f"{namespace}:" if namespace else ""

        rows = [
            [name, command.get_short_help_str(limit=80)]
            for name, command in sorted(application.all().items())
            if not command.hidden and name.startswith(prefix)
        ]

        if self.option("raw"):
            width = max((len(name) for name, _ in rows), default=0)
            for name, description in rows:
                self.line(f"{name.ljust(width)}  {description}".rstrip())
            return 0

        self.line(application.long_version)
        self.line("")
        self.comment("Usage:")
        self.line("  command [options] [arguments]")
        self.line("")
        self.comment(f"Available commands for the \"{namespace}\" namespace:" if namespace else "Available commands:")
        self.table(["Command", "Description"], rows, style="compact")
        return 0
