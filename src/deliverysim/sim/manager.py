from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..matching.base import MatchingPolicy, Pair
from ..matching.fifo import FIFOMatching
from ..matching.matched import MatchedMatching
from ..models import Driver, Event, Order
from .metrics import DeliveryStats, DeliverySummary
from .scheduler import EventScheduler

logger = logging.getLogger(__name__)


def make_policy(match_order_w_driver: bool) -> MatchingPolicy:
    if match_order_w_driver:
        return MatchedMatching()
    return FIFOMatching()


class OrderManager:
    """Pairs prepared orders with arrived drivers and keeps running delivery statistics."""

    def __init__(self, scheduler: EventScheduler, match_order_w_driver: bool = False) -> None:
        self.scheduler = scheduler
        self.match_order_w_driver = match_order_w_driver
        self.policy = make_policy(match_order_w_driver)
        self.stats = DeliveryStats()
        self.events: List[Event] = []
        self.pairs: List[Pair] = []
        self.summary: Optional[DeliverySummary] = None

    @property
    def orders_received(self) -> int:
        return self.stats.orders_received

    @property
    def orders_delivered(self) -> int:
        return self.stats.orders_delivered

    def pending(self) -> Tuple[int, int]:
        return self.policy.pending()

    def order_received(self, order: Order) -> None:
        logger.info("-->orderReceived %s", order)
        self.stats.orders_received += 1
        self._record("order_received", order.id, order.driver_id)
        self.scheduler.schedule_after(order.fulfil_time, self._order_prepared, order)

    def dispatch_driver(self, driver: Driver) -> None:
        logger.info("-->dispatchDriver %s", driver)
        self._record("dispatch_driver", driver.order_id, driver.id)
        self.scheduler.schedule_after(driver.pickup_delay, self._driver_arrived, driver)

    def _order_prepared(self, order: Order) -> None:
        assert order.fulfilled_time is None, f"order {order.id} prepared twice"
        order.fulfilled_time = self.scheduler.now()
        logger.info("-->orderPrepared %s", order)
        self._record("order_prepared", order.id, order.driver_id)
        pair = self.policy.order_prepared(order)
        if pair is not None:
            self._pickup(*pair)

    def _driver_arrived(self, driver: Driver) -> None:
        assert driver.arrive_time is None, f"driver {driver.id} arrived twice"
        driver.arrive_time = self.scheduler.now()
        logger.info("-->driverArrived %s", driver)
        self._record("driver_arrived", driver.order_id, driver.id)
        pair = self.policy.driver_arrived(driver)
        if pair is not None:
            self._pickup(*pair)

    def _pickup(self, driver: Driver, order: Order) -> None:
        now = self.scheduler.now()
        driver.pickup_time = now
        order.pickup_time = now
        logger.info(
            "-->%s order pickedup %s, %s by driver %s with order id %s",
            self.policy.name.capitalize(), order.name, order.id, driver.id, driver.order_id,
        )
        self.pairs.append((driver, order))
        self._record("pickup", order.id, driver.id)
        self._update_stats(order, driver)

    def _update_stats(self, order: Order, driver: Driver) -> None:
        self.stats.update(order, driver)
        if self.stats.complete():
            self.summary = self.stats.summary()
            for line in self.summary.lines():
                logger.info(line)

    def _record(self, kind: str, order_id: Optional[str], driver_id: Optional[int]) -> None:
        self.events.append(Event(timestamp=self.scheduler.now(), kind=kind, order_id=order_id, driver_id=driver_id))
