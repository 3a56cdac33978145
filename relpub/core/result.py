"""Result type for explicit error handling.

Fallible service calls return ``Ok(value)`` or ``Err(error)`` instead of
raising, so the CLI decides in one place how a failure ends the process.

Usage:
    match load_project_manifests(manifests_dir, "chef"):
        case Ok(manifests):
            print(manifests.platform_names_path)
        case Err(error):
            print(f"error: {error.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result holding ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result holding ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
