import random
from collections import Counter

from services.shuffle import sample, shuffle


def test_shuffle_returns_permutation_without_touching_input():
    items = [1, 2, 3, 4, 5]
    result = shuffle(items, random.Random(7))
    assert sorted(result) == items
    assert items == [1, 2, 3, 4, 5]


def test_shuffle_handles_empty_and_single():
    assert shuffle([]) == []
    assert shuffle(["only"]) == ["only"]


def test_shuffle_is_deterministic_with_seeded_rng():
    assert shuffle(range(10), random.Random(3)) == shuffle(range(10), random.Random(3))


def test_shuffle_moves_every_item_to_every_position():
    rng = random.Random(42)
    first_positions = Counter(shuffle(["a", "b", "c", "d"], rng)[0] for _ in range(2000))
    assert set(first_positions) == {"a", "b", "c", "d"}
    assert min(first_positions.values()) > 350


def test_sample_never_exceeds_population():
    assert len(sample([1, 2, 3], 5, random.Random(1))) == 3
    assert sample([1, 2, 3], 0) == []
    picked = sample(range(20), 4, random.Random(1))
    assert len(set(picked)) == 4
