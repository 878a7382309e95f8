import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence


@dataclass(frozen=True)
class LootItem:
    name: str
    weight: float

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "LootItem":
        return cls(name=str(raw.get('name', '')), weight=float(raw.get('weight', 0) or 0))

    def to_dict(self) -> Dict[str, Any]:
        weight = int(self.weight) if float(self.weight).is_integer() else self.weight
        return {'name': self.name, 'weight': weight}


@dataclass
class LootContainer:
    items: List[LootItem] = field(default_factory=list)
    drops: int = 1

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "LootContainer":
        items = [LootItem.from_dict(i) for i in (raw.get('items') or [])]
        try:
            drops = int(raw.get('drops', 1))
        except (TypeError, ValueError):
            drops = 1
        return cls(items=items, drops=drops)

    def to_dict(self) -> Dict[str, Any]:
        return {'items': [i.to_dict() for i in self.items], 'drops': self.drops}

    def describe(self) -> str:
        items = ', '.join(f"{i.name} ({i.to_dict()['weight']})" for i in self.items) or 'None'
        return f"Items: {items}\nDrops: {self.drops}"


class WeightedLootDrawer:
    """Independent weighted draws, with replacement.

    Each item is picked with probability ``weight / total``. A draw against a
    container whose weights sum to zero or less yields nothing, so degenerate
    containers return fewer names than requested instead of raising.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def draw_one(self, items: Sequence[LootItem]) -> Optional[str]:
        total = sum(item.weight for item in items)
        if total <= 0:
            return None
        r = self.rng.random() * total
        acc = 0.0
        for item in items:
            acc += item.weight
            if r < acc:
                return item.name
        return None

    def draw(self, items: Sequence[LootItem], count: int) -> List[str]:
        drops: List[str] = []
        for _ in range(max(0, count)):
            name = self.draw_one(items)
            if name is not None:
                drops.append(name)
        return drops

    def open(self, container: LootContainer) -> List[str]:
        return self.draw(container.items, container.drops)
