"""Fill a fixed number of slots from prioritised buckets, with backfill."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence, TypeVar

T = TypeVar("T")

FIVE_TIER_PLAN = ("easy", "easy", "medium", "medium", "hard")


def fill_slots(
    buckets: Mapping[str, Sequence[T]],
    plan: Sequence[str],
    fallback_order: Optional[Mapping[str, Sequence[str]] | Sequence[str]] = None,
) -> List[T]:
    """Pick one item per slot in ``plan``.

    Each slot names the bucket it prefers. When that bucket is empty the slot
    is backfilled from ``fallback_order``: either one shared list of bucket
    names or a per-bucket mapping. Items are consumed from the front of each
    bucket so no item is used twice. Returns fewer items than ``plan`` only
    when every bucket is exhausted.
    """
    pools: Dict[str, List[T]] = {name: list(items) for name, items in buckets.items()}
    picked: List[T] = []
    for wanted in plan:
        for name in _candidates_for(wanted, pools, fallback_order):
            pool = pools.get(name)
            if pool:
                picked.append(pool.pop(0))
                break
    return picked


def _candidates_for(
    wanted: str,
    pools: Mapping[str, Sequence[T]],
    fallback_order: Optional[Mapping[str, Sequence[str]] | Sequence[str]],
) -> List[str]:
    if fallback_order is None:
        rest = [name for name in pools if name != wanted]
    elif isinstance(fallback_order, Mapping):
        rest = list(fallback_order.get(wanted, ()))
    else:
        rest = list(fallback_order)
    return [wanted] + [name for name in rest if name != wanted]


def prefer_unplayed(items: Sequence[T], is_played) -> List[T]:
    """Stable partition: unplayed items first, played ones after."""
    fresh = [item for item in items if not is_played(item)]
    stale = [item for item in items if is_played(item)]
    return fresh + stale
