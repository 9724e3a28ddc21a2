"""
Protocol definitions for bloomkit.

These define the interfaces that pluggable collaborators must implement,
so filters stay agnostic of the concrete hash library.
"""

from abc import abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class HashEngine(Protocol):
    """Protocol for 128-bit hash providers.

    ``hash128`` must be deterministic for identical input, defined for empty
    input, and return two unsigned 64-bit halves that behave as if
    independent. Engines compare by value so filters can verify they hash
    compatibly before a merge.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry name of the engine."""
        ...

    @abstractmethod
    def hash128(self, data: bytes) -> tuple[int, int]:
        """Hash ``data`` to a pair of unsigned 64-bit integers."""
        ...
