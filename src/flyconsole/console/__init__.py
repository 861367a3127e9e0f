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
"""flyconsole console: click commands resolved and run through the DI container.

Subclass :class:`Command`, register it on an :class:`Application`, and its
``handle`` method runs with its parameters injected.
"""

from flyconsole.console.application import Application
from flyconsole.console.command import Command
from flyconsole.console.commands import ListCommand
from flyconsole.console.input import CommandInput, InputArgument, InputOption
from flyconsole.console.output import Output, OutputFormatter, OutputStyle
from flyconsole.console.properties import ConsoleProperties
from flyconsole.console.question import ChoiceQuestion, Question
from flyconsole.console.table import TableSeparator, TableStyles
from flyconsole.console.verbosity import Verbosity, parse_verbosity

__all__ = [
    "Application",
    "ChoiceQuestion",
    "Command",
    "CommandInput",
    "ConsoleProperties",
    "InputArgument",
    "InputOption",
    "ListCommand",
    "Output",
    "OutputFormatter",
    "OutputStyle",
    "Question",
    "TableSeparator",
    "TableStyles",
    "Verbosity",
    "parse_verbosity",
]
