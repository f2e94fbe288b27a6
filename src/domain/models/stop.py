from __future__ import annotations

from dataclasses import dataclass, field

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Stop:
    """A boarding/alighting point.

    Identity is the integer code: address, location and the back-references
    filled in at network assembly never take part in equality or hashing.
    Stops loaded without coordinates have no ``location``.
    """

    code: int
    address: str = field(default="", compare=False)
    location: GeoPoint | None = field(default=None, compare=False)
    line_codes: tuple[str, ...] = field(default=(), compare=False, repr=False)
    walkable_codes: tuple[int, ...] = field(default=(), compare=False, repr=False)

    def __str__(self) -> str:
        return f"Stop {self.code}: {self.address}"
