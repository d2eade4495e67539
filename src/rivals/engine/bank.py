from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .board import Principality
from .cards import Card
from .types import CostMap, ResourceType


# (region, units) pairs taken by a payment, in the order they were taken
Withdrawal = List[Tuple[Card, int]]


class ResourceInvariantError(RuntimeError):
    """Raised when a bank operation would break the region storage invariant."""


class ResourceBank:
    """Resource accounting over the regions of one principality.

    Nothing is stored here: every count is the sum of the matching regions' stock.
    """

    def __init__(self, board: Principality):
        self._board = board

    def _regions_for(self, rtype: ResourceType) -> List[Card]:
        return [pos.card for pos in self._board.regions() if pos.card.produced_resource == rtype]

    def count(self, rtype: ResourceType) -> int:
        return sum(region.stored_resources for region in self._regions_for(rtype))

    def total(self) -> int:
        return sum(pos.card.stored_resources for pos in self._board.regions())

    def capacity(self, rtype: ResourceType) -> int:
        return sum(region.capacity for region in self._regions_for(rtype))

    def add(self, rtype: ResourceType, amount: int) -> int:
        """Store up to ``amount`` units, least-full region first; returns units stored."""
        if amount <= 0:
            return 0
        added = 0
        for region in sorted(self._regions_for(rtype), key=lambda card: card.stored_resources):
            while added < amount and region.add_resource():
                added += 1
        return added

    def _take(self, rtype: ResourceType, amount: int) -> Withdrawal:
        taken: Withdrawal = []
        removed = 0
        for region in sorted(self._regions_for(rtype), key=lambda card: card.stored_resources, reverse=True):
            units = 0
            while removed < amount and region.remove_resource():
                removed += 1
                units += 1
            if units:
                taken.append((region, units))
        if removed != amount:
            raise ResourceInvariantError(f"removed {removed} of {amount} {rtype.value}")
        return taken

    def remove(self, rtype: ResourceType, amount: int) -> bool:
        if amount <= 0:
            return True
        if self.count(rtype) < amount:
            return False
        self._take(rtype, amount)
        return True

    def can_afford(self, cost: CostMap) -> bool:
        return all(self.count(rtype) >= amount for rtype, amount in cost.items() if amount > 0)

    def withdraw(self, cost: CostMap) -> Optional[Withdrawal]:
        """Take a whole cost, fullest region first; None if it cannot be afforded.

        The returned record is what ``restore`` needs to undo the payment exactly.
        """
        if not self.can_afford(cost):
            return None
        taken: Withdrawal = []
        for rtype, amount in cost.items():
            if amount > 0:
                taken.extend(self._take(rtype, amount))
        return taken

    def pay(self, cost: CostMap) -> bool:
        return self.withdraw(cost) is not None

    def restore(self, taken: Withdrawal) -> None:
        """Put every unit back into the region it was taken from."""
        for region, units in taken:
            if region.stored_resources + units > region.capacity:
                raise ResourceInvariantError(f"cannot restore {units} to {region.name}")
            region.stored_resources += units

    def clear(self, rtype: ResourceType) -> int:
        """Empty every region of a type; returns the units lost."""
        lost = 0
        for region in self._regions_for(rtype):
            lost += region.stored_resources
            region.stored_resources = 0
        return lost

    def summary(self) -> Dict[ResourceType, int]:
        return {rtype: self.count(rtype) for rtype in ResourceType}
