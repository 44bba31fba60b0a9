from __future__ import annotations

import pytest

from deliverysim.models import Driver, Order
from deliverysim.sim.scheduler import EventScheduler


@pytest.fixture
def scheduler() -> EventScheduler:
    return EventScheduler()


def make_pair(order_id: str, driver_id: int, fulfil_time: float, pickup_delay: float, now: float = 0.0):
    order = Order(id=order_id, name=f"name-{order_id}", fulfil_time=fulfil_time, create_time=now)
    driver = Driver(id=driver_id, start_time=now, pickup_delay=pickup_delay)
    driver.order_id = order.id
    order.driver_id = driver.id
    return order, driver
