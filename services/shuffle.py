"""Fisher-Yates helpers used for answer ordering and candidate sampling."""

from __future__ import annotations

import random
from typing import Iterable, List, Optional, TypeVar

T = TypeVar("T")


def shuffle(items: Iterable[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a shuffled copy of ``items``; the input is left untouched."""
    rng = rng or random.Random()
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def sample(items: Iterable[T], k: int, rng: Optional[random.Random] = None) -> List[T]:
    return shuffle(items, rng)[: max(k, 0)]
