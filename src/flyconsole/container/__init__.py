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
"""flyconsole DI Container: type-hint driven dependency injection."""

from flyconsole.container.bean import Qualifier, primary
from flyconsole.container.container import Container
from flyconsole.container.exceptions import (
    BeanCreationException,
    BeanCurrentlyInCreationError,
    NoSuchBeanError,
    NoUniqueBeanError,
)
from flyconsole.container.types import Scope

__all__ = [
    "BeanCreationException",
    "BeanCurrentlyInCreationError",
    "Container",
    "NoSuchBeanError",
    "NoUniqueBeanError",
    "Qualifier",
    "Scope",
    "primary",
]
