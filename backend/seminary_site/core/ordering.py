"""Banner Ordering — position swaps for the admin move up/down action.

Invariants:
    - Moving the first item up or the last item down is a no-op (no updates)
    - A move produces exactly two updates: the item and its neighbour swap positions
    - Positions are list indexes of the currently displayed order, not stored values
"""

from typing import Literal

from seminary_site.core.errors import ResourceNotFoundError
from seminary_site.schemas.content import Banner

Direction = Literal["up", "down"]


def plan_move(
    banners: list[Banner], banner_id: str, direction: Direction,
) -> list[tuple[str, int]]:
    """(banner_id, new order_index) pairs to persist for one move."""
    index = next((i for i, b in enumerate(banners) if b.id == banner_id), None)
    if index is None:
        raise ResourceNotFoundError("Banner", banner_id)
    target = index - 1 if direction == "up" else index + 1
    if target < 0 or target >= len(banners):
        return []
    return [
        (banners[index].id, target),
        (banners[target].id, index),
    ]
