from __future__ import annotations

from dataclasses import dataclass
from typing import List

import pandas as pd

from ..models import Driver, Event, Order


def running_avg(avg: float, n: int, sample: float) -> float:
    """Mean of ``n`` samples averaging ``avg`` extended by one more sample."""
    return avg + (sample - avg) / (n + 1)


@dataclass(slots=True)
class DeliverySummary:
    orders_delivered: int
    avg_order_wait_ms: int
    avg_driver_wait_ms: int
    avg_order_prep_ms: int
    avg_driver_delay_ms: int

    def lines(self) -> List[str]:
        return [
            f"Number of orders delivered = {self.orders_delivered}",
            f"Average Order Wait Time = {self.avg_order_wait_ms} ms",
            f"Average Driver Wait Time = {self.avg_driver_wait_ms} ms",
            f"Average Order Prep Time = {self.avg_order_prep_ms} ms",
            f"Average Driver Delay = {self.avg_driver_delay_ms} ms",
        ]


@dataclass(slots=True)
class DeliveryStats:
    # Averages in seconds
    orders_received: int = 0
    orders_delivered: int = 0
    avg_order_wait_time: float = 0.0
    avg_driver_wait_time: float = 0.0
    avg_order_prep_time: float = 0.0
    avg_driver_delay: float = 0.0

    def update(self, order: Order, driver: Driver) -> None:
        n = self.orders_delivered
        self.orders_delivered += 1
        self.avg_driver_wait_time = running_avg(self.avg_driver_wait_time, n, driver.wait_time() or 0.0)
        self.avg_order_wait_time = running_avg(self.avg_order_wait_time, n, order.wait_time() or 0.0)
        self.avg_order_prep_time = running_avg(self.avg_order_prep_time, n, order.fulfil_time)
        self.avg_driver_delay = running_avg(self.avg_driver_delay, n, driver.pickup_delay)

    def complete(self) -> bool:
        return self.orders_received > 0 and self.orders_received == self.orders_delivered

    def summary(self) -> DeliverySummary:
        return DeliverySummary(
            orders_delivered=self.orders_delivered,
            avg_order_wait_ms=int(self.avg_order_wait_time * 1000),
            avg_driver_wait_ms=int(self.avg_driver_wait_time * 1000),
            avg_order_prep_ms=int(self.avg_order_prep_time * 1000),
            avg_driver_delay_ms=int(self.avg_driver_delay * 1000),
        )


def orders_to_dataframe(orders: List[Order]) -> pd.DataFrame:
    data = [
        {
            "id": o.id,
            "name": o.name,
            "driver_id": o.driver_id,
            "fulfil_time": o.fulfil_time,
            "create_time": o.create_time,
            "fulfilled_time": o.fulfilled_time,
            "pickup_time": o.pickup_time,
            "wait_time": o.wait_time(),
            "total_time": o.total_time(),
        }
        for o in orders
    ]
    return pd.DataFrame(data, columns=[
        "id", "name", "driver_id", "fulfil_time", "create_time",
        "fulfilled_time", "pickup_time", "wait_time", "total_time",
    ])


def drivers_to_dataframe(drivers: List[Driver]) -> pd.DataFrame:
    data = [
        {
            "id": d.id,
            "order_id": d.order_id,
            "start_time": d.start_time,
            "pickup_delay": d.pickup_delay,
            "arrive_time": d.arrive_time,
            "pickup_time": d.pickup_time,
            "wait_time": d.wait_time(),
        }
        for d in drivers
    ]
    return pd.DataFrame(data, columns=[
        "id", "order_id", "start_time", "pickup_delay", "arrive_time", "pickup_time", "wait_time",
    ])


def events_to_dataframe(events: List[Event]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"timestamp": e.timestamp, "kind": e.kind, "order_id": e.order_id, "driver_id": e.driver_id} for e in events],
        columns=["timestamp", "kind", "order_id", "driver_id"],
    )
