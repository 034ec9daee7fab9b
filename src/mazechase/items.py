"""Collectible items: spawning, registry and per-tick collection."""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

import structlog
from pydantic import BaseModel

from .exceptions import ItemNotFoundError
from .maze import CellKind, Maze
from .types import CAPTURE_RADIUS, Position

logger = structlog.get_logger()

# Chance that a freshly spawned item is one of the non-PILL types
SPECIAL_ITEM_CHANCE = 0.1


class ItemType(str, Enum):
    """Kinds of collectible item."""

    PILL = "PILL"
    BANDAID = "BANDAID"
    SYRINGE = "SYRINGE"
    VACCINE = "VACCINE"


ITEM_VALUES: dict[ItemType, int] = {
    ItemType.PILL: 10,
    ItemType.BANDAID: 50,
    ItemType.SYRINGE: 100,
    ItemType.VACCINE: 200,
}

SPECIAL_ITEM_TYPES: tuple[ItemType, ...] = (
    ItemType.BANDAID,
    ItemType.SYRINGE,
    ItemType.VACCINE,
)


class Item(BaseModel, frozen=True):
    """Immutable item state. Collection is permanent."""

    item_id: str
    item_type: ItemType
    position: Position
    value: int
    collected: bool = False

    @classmethod
    def create(cls, item_id: str, item_type: ItemType, position: Position) -> "Item":
        """Create an uncollected item worth its type's point value."""
        return cls(
            item_id=item_id,
            item_type=item_type,
            position=position,
            value=ITEM_VALUES[item_type],
        )

    def with_collected(self) -> "Item":
        """Return copy marked as collected."""
        return self.model_copy(update={"collected": True})


class ItemSet:
    """Ordered registry of the items in one session."""

    def __init__(self, items: list[Item] | None = None):
        self._items: dict[str, Item] = {}
        for item in items or []:
            self._items[item.item_id] = item

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items.values()))

    def get(self, item_id: str) -> Item:
        """Get item by ID.

        Raises:
            ItemNotFoundError: If item not found.
        """
        if item_id not in self._items:
            raise ItemNotFoundError(f"Item {item_id} not found")
        return self._items[item_id]

    def uncollected(self) -> list[Item]:
        return [item for item in self._items.values() if not item.collected]

    def mark_collected(self, item_id: str) -> Item:
        """Mark an item collected and return the updated item."""
        item = self.get(item_id).with_collected()
        self._items[item_id] = item
        return item

    def all_collected(self) -> bool:
        return all(item.collected for item in self._items.values())

    def collected_value(self) -> int:
        """Total points of every collected item."""
        return sum(item.value for item in self._items.values() if item.collected)


def spawn_items(maze: Maze, rng: random.Random) -> ItemSet:
    """
    Place one item on every PATH cell, in row-major order.

    Spawn cells get no item. Each item is a PILL unless a 10% draw makes it
    special, in which case BANDAID, SYRINGE and VACCINE are equally likely.
    """
    items: list[Item] = []
    for n, tile in enumerate(maze.find_cells(CellKind.PATH)):
        if rng.random() < SPECIAL_ITEM_CHANCE:
            item_type = SPECIAL_ITEM_TYPES[int(rng.random() * len(SPECIAL_ITEM_TYPES))]
        else:
            item_type = ItemType.PILL
        items.append(Item.create(f"item-{n}", item_type, tile.to_position()))

    logger.debug("items_spawned", count=len(items))
    return ItemSet(items)


@dataclass
class CollectionResult:
    """Result of the collection phase for one tick."""

    collected: list[Item] = field(default_factory=list)
    score_delta: int = 0
    all_collected: bool = False


def process_collection_phase(items: ItemSet, position: Position) -> CollectionResult:
    """
    Collect every uncollected item within capture range of position.

    All captures in one call are credited together. ``all_collected`` is
    only evaluated when something was captured this call.
    """
    result = CollectionResult()

    for item in items.uncollected():
        if position.distance_to(item.position) < CAPTURE_RADIUS:
            result.collected.append(items.mark_collected(item.item_id))
            result.score_delta += item.value

    if result.collected:
        result.all_collected = items.all_collected()
        logger.debug(
            "items_collected",
            item_ids=[item.item_id for item in result.collected],
            score_delta=result.score_delta,
            remaining=len(items.uncollected()),
        )

    return result
