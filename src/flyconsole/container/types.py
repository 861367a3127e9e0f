"""Service lifetimes."""

from enum import Enum, auto


class Scope(Enum):
    """How long the container keeps a built service."""

    SINGLETON = auto()  # built once, shared
    TRANSIENT = auto()  # built on every resolve
