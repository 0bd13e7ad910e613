"""32-bit sequence numbers that wrap around relative to a zero point."""

from __future__ import annotations

from dataclasses import dataclass

_MODULUS = 1 << 32
_HALF_WINDOW = (1 << 31) - 1


@dataclass(frozen=True)
class Wrap32:
    """A 32-bit unsigned integer that wraps back to zero after 2**32 - 1."""

    raw_value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_value", self.raw_value % _MODULUS)

    @staticmethod
    def wrap(n: int, zero_point: Wrap32) -> Wrap32:
        """Wrap the absolute sequence number ``n`` relative to ``zero_point``."""
        return zero_point + n

    def unwrap(self, zero_point: Wrap32, checkpoint: int) -> int:
        """Return the absolute sequence number closest to ``checkpoint`` that wraps to this value."""
        candidate = (self.raw_value - zero_point.raw_value) % _MODULUS
        if candidate >= checkpoint:
            return candidate
        candidate += (checkpoint - candidate) // _MODULUS * _MODULUS
        if checkpoint - candidate > _HALF_WINDOW:
            candidate += _MODULUS
        return candidate

    def __add__(self, n: int) -> Wrap32:
        return Wrap32(self.raw_value + n)