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
"""Tests for the flyconsole exception hierarchy."""

import pytest

from flyconsole.container import BeanCreationException, NoSuchBeanError
from flyconsole.kernel.exceptions import (
    BusinessException,
    CommandNotFoundException,
    ConfigurationException,
    FlyConsoleException,
    InfrastructureException,
    InvalidArgumentException,
    ResourceNotFoundException,
    ValidationException,
)


class TestFlyConsoleException:
    def test_basic_creation(self):
        exc = FlyConsoleException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_context_not_shared(self):
        exc = FlyConsoleException("test")
        exc.context["key"] = "value"
        assert FlyConsoleException("test2").context == {}


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        ("child", "parent"),
        [
            (BusinessException, FlyConsoleException),
            (ValidationException, BusinessException),
            (InvalidArgumentException, ValidationException),
            (ResourceNotFoundException, BusinessException),
            (CommandNotFoundException, ResourceNotFoundException),
            (CommandNotFoundException, LookupError),
            (ConfigurationException, InfrastructureException),
            (BeanCreationException, InfrastructureException),
            (NoSuchBeanError, LookupError),
        ],
    )
    def test_subclassing(self, child, parent):
        assert issubclass(child, parent)


class TestCommandNotFoundException:
    def test_message_and_code(self):
        exc = CommandNotFoundException("gret")
        assert str(exc) == 'Command "gret" is not defined.'
        assert exc.code == "COMMAND_NOT_FOUND"

    def test_alternatives_listed(self):
        exc = CommandNotFoundException("gret", ["greet"])
        assert "Did you mean one of these?" in str(exc)
        assert exc.context["alternatives"] == ["greet"]
