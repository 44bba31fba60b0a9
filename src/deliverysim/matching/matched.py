from __future__ import annotations

from typing import Dict, Optional, Tuple

from ..models import Driver, Order
from .base import Pair


class MatchedMatching:
    name = "matched"

    def __init__(self) -> None:
        # Prepared orders waiting for their driver, keyed by order id
        self.pending_order_map: Dict[str, Order] = {}
        # Arrived drivers waiting for their order, keyed by driver id
        self.pending_driver_map: Dict[int, Driver] = {}

    def find_driver(self, order: Order) -> Optional[Driver]:
        return self.pending_driver_map.get(order.driver_id)

    def find_order(self, driver: Driver) -> Optional[Order]:
        return self.pending_order_map.get(driver.order_id)

    def order_prepared(self, order: Order) -> Optional[Pair]:
        driver = self.find_driver(order)
        if driver is None:
            self.pending_order_map[order.id] = order
            return None
        del self.pending_driver_map[driver.id]
        return driver, order

    def driver_arrived(self, driver: Driver) -> Optional[Pair]:
        order = self.find_order(driver)
        if order is None:
            self.pending_driver_map[driver.id] = driver
            return None
        del self.pending_order_map[order.id]
        return driver, order

    def pending(self) -> Tuple[int, int]:
        return len(self.pending_order_map), len(self.pending_driver_map)
