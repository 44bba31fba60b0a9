from __future__ import annotations

from typing import Optional, Protocol, Tuple

from ..models import Driver, Order

Pair = Tuple[Driver, Order]


class MatchingPolicy(Protocol):
    name: str

    def order_prepared(self, order: Order) -> Optional[Pair]:
        ...

    def driver_arrived(self, driver: Driver) -> Optional[Pair]:
        ...

    def pending(self) -> Tuple[int, int]:
        """(orders waiting, drivers waiting)"""
        ...
