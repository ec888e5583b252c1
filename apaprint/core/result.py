"""
Generic result container for all apaprint computations.

The Result class provides a standardized envelope that all formatted
results use. This enables shared tooling for timing, diagnostics and
inspection while allowing each formatter to define its own payload.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (options used, dropped rows)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) once the strings are built
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for formatted statistics.

    Type Parameters:
        P: The formatter-specific payload type

    Attributes:
        params: Formatter-specific payload (strings, table, raw estimates)
        info: Structured metadata (options used, dropped rows)
        timing: Execution timing breakdown, or None if not measured
        warnings: Non-fatal issues encountered during formatting

    Examples:
        >>> Result(
        ...     params=AnovaPrintParams(...),
        ...     info={'es': ('pes',), 'mse': True},
        ...     timing={'total_seconds': 0.001},
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
