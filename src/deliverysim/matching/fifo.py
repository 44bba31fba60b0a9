from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Tuple

from ..models import Driver, Order
from .base import Pair


class FIFOMatching:
    """Pairs the oldest waiting driver with the oldest prepared order, whatever order the driver was sent for."""

    name = "unmatched"

    def __init__(self) -> None:
        self.driver_queue: Deque[Driver] = deque()
        self.prepared_order_queue: Deque[Order] = deque()

    def order_prepared(self, order: Order) -> Optional[Pair]:
        self.prepared_order_queue.append(order)
        return self._pop_pair()

    def driver_arrived(self, driver: Driver) -> Optional[Pair]:
        self.driver_queue.append(driver)
        return self._pop_pair()

    def _pop_pair(self) -> Optional[Pair]:
        if not self.driver_queue or not self.prepared_order_queue:
            return None
        return self.driver_queue.popleft(), self.prepared_order_queue.popleft()

    def pending(self) -> Tuple[int, int]:
        return len(self.prepared_order_queue), len(self.driver_queue)
