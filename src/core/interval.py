# core/interval.py
import math


class Interval:
    """
    A closed range [min, max] on the real line. An interval whose min is
    greater than its max is empty.
    """
    __slots__ = ("min", "max")

    def __init__(self, minimum: float = math.inf, maximum: float = -math.inf):
        self.min = minimum
        self.max = maximum

    @staticmethod
    def union(a: "Interval", b: "Interval") -> "Interval":
        """The tightest interval enclosing both a and b."""
        return Interval(min(a.min, b.min), max(a.max, b.max))

    def size(self) -> float:
        return self.max - self.min

    def is_empty(self) -> bool:
        return self.min > self.max

    def contains(self, x: float) -> bool:
        return self.min <= x <= self.max

    def surrounds(self, x: float) -> bool:
        return self.min < x < self.max

    def clamp(self, x: float) -> float:
        if x < self.min:
            return self.min
        if x > self.max:
            return self.max
        return x

    def expand(self, delta: float) -> "Interval":
        """Grows the interval by delta in total, half on each side."""
        padding = delta / 2.0
        return Interval(self.min - padding, self.max + padding)

    def translate(self, offset: float) -> "Interval":
        return Interval(self.min + offset, self.max + offset)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.min == other.min and self.max == other.max

    def __repr__(self) -> str:
        return f"Interval({self.min}, {self.max})"


Interval.EMPTY = Interval(math.inf, -math.inf)
Interval.UNIVERSE = Interval(-math.inf, math.inf)
Interval.UNIT = Interval(0.0, 1.0)
