from typing import Iterable, List

from cpauth.crypto import GroupParameters

TOY_GROUP = GroupParameters(p=23, q=11, alpha=4, beta=9)


class FixedRandom:
    """Replays a fixed sequence of draws instead of real entropy."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values: List[int] = list(values)

    def randbelow(self, bound: int) -> int:
        value = self.values.pop(0)
        if not 0 <= value < bound:
            raise AssertionError(f"{value} outside [0, {bound})")
        return value
