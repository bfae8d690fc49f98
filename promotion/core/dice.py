import random
from typing import List, Optional


class DiceBag:
    """A handful of dice rolled together.

    ``DiceBag(20)`` is a single d20, ``DiceBag(6, 6)`` two six-sided dice.
    The individual results of the latest roll are kept so callers can show
    them next to the total.
    """

    def __init__(self, *faces: int, rng: Optional[random.Random] = None):
        if not faces:
            raise ValueError("A dice bag needs at least one die")
        if any(face < 1 for face in faces):
            raise ValueError(f"Every die needs at least one face: {faces}")
        self.faces = tuple(faces)
        self._rng = rng or random.Random()
        self._last_roll: List[int] = []

    def roll(self) -> int:
        self._last_roll = [self._rng.randint(1, face) for face in self.faces]
        return sum(self._last_roll)

    def get_last_roll(self) -> List[int]:
        return list(self._last_roll)

    @property
    def last_roll(self) -> List[int]:
        return self.get_last_roll()

    @property
    def minimum(self) -> int:
        return len(self.faces)

    @property
    def maximum(self) -> int:
        return sum(self.faces)

    def __repr__(self):
        return f"DiceBag({', '.join(f'd{face}' for face in self.faces)})"
