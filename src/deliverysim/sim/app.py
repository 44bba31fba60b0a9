from __future__ import annotations

import logging
import signal
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, Iterable, List, Optional

import numpy as np

from ..config import SimConfig
from ..data import load_orders
from ..models import Driver, Event, Order, OrderRecord
from .manager import OrderManager
from .metrics import DeliverySummary
from .scheduler import EventScheduler

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RunResult:
    mode: str
    orders: List[Order]
    drivers: List[Driver]
    events: List[Event]
    summary: Optional[DeliverySummary]
    manager: OrderManager


class App:
    """Feeds order records to an OrderManager at a fixed pace and drains pending timers on shutdown."""

    def __init__(
        self,
        config: SimConfig,
        records: Optional[Iterable[OrderRecord]] = None,
        scheduler: Optional[EventScheduler] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.config = config
        self.scheduler = scheduler if scheduler is not None else EventScheduler(realtime=config.realtime)
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)
        self.records: Optional[Deque[OrderRecord]] = deque(records) if records is not None else None
        self.order_manager = OrderManager(self.scheduler, config.match_driver_w_order)
        self.shutting_down = False
        self.next_driver_id = 1
        self.orders: List[Order] = []
        self.drivers: List[Driver] = []

    @property
    def mode(self) -> str:
        return "matched" if self.config.match_driver_w_order else "unmatched"

    def shutdown(self, *_: object) -> None:
        # Scheduled prepared/arrived timers still fire; only order intake stops
        if not self.shutting_down:
            logger.info("Shutting down, processing all pending events")
        self.shutting_down = True

    def run(self) -> RunResult:
        if self.records is None:
            self.records = deque(load_orders(self.config.data_path))

        previous = self._install_signal_handlers() if self.config.realtime else None
        try:
            if self.records:
                self.scheduler.schedule_after(self.config.order_receive_interval, self._receive_order)
            self.scheduler.run()
        finally:
            if previous is not None:
                self._restore_signal_handlers(previous)

        return RunResult(
            mode=self.mode,
            orders=self.orders,
            drivers=self.drivers,
            events=self.order_manager.events,
            summary=self.order_manager.summary,
            manager=self.order_manager,
        )

    def _pickup_delay(self) -> float:
        return float(self.rng.uniform(self.config.pickup_delay_min, self.config.pickup_delay_max))

    def _receive_order(self, _: object = None) -> None:
        if self.shutting_down:
            return
        if not self.records:
            self.shutdown()
            return

        record = self.records.popleft()
        now = self.scheduler.now()
        order = Order(id=record.id, name=record.name, fulfil_time=record.fulfil_time, create_time=now)
        driver = Driver(id=self.next_driver_id, start_time=now, pickup_delay=self._pickup_delay())
        self.next_driver_id += 1
        driver.order_id = order.id
        order.driver_id = driver.id
        self.orders.append(order)
        self.drivers.append(driver)

        self.order_manager.order_received(order)
        self.order_manager.dispatch_driver(driver)

        if not self.shutting_down:
            self.scheduler.schedule_after(self.config.order_receive_interval, self._receive_order)

    def _install_signal_handlers(self) -> Dict[int, Any]:
        previous = {}
        for sig in (signal.SIGINT, signal.SIGTERM):
            previous[sig] = signal.getsignal(sig)
            signal.signal(sig, self.shutdown)
        return previous

    def _restore_signal_handlers(self, previous: Dict[int, Any]) -> None:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def run_simulation(records: Iterable[OrderRecord], config: SimConfig) -> RunResult:
    return App(config, records=list(records)).run()
