"""The circuit: increments a little-endian 64-bit counter carried by a witness."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

_U64_MASK = (1 << 64) - 1
_U64_SIZE = 8


@dataclass(frozen=True)
class Witness:
    """A circuit input: either raw data bytes or a domain state proof."""

    data: bytes | None = None
    state_proof: Any = None

    def as_data(self) -> bytes | None:
        """Return the raw data of the witness, or None if it holds no data."""
        return self.data


def circuit(witnesses: Sequence[Witness]) -> bytes:
    """Read a u64 from the first witness, add one (wrapping) and return it encoded.

    Raises ValueError when there is no witness, when the first witness holds
    no data, or when its data is not exactly eight bytes long.
    """
    if not witnesses:
        raise ValueError("circuit requires at least one witness")
    data = witnesses[0].as_data()
    if data is None:
        raise ValueError("first witness holds no data")
    if len(data) != _U64_SIZE:
        raise ValueError(f"expected {_U64_SIZE} bytes of data, got {len(data)}")
    value = int.from_bytes(data, "little")
    return ((value + 1) & _U64_MASK).to_bytes(_U64_SIZE, "little")