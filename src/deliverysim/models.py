from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class OrderRecord:
    id: str
    name: str
    fulfil_time: float


@dataclass(slots=True)
class Order:
    id: str
    name: str
    fulfil_time: float
    create_time: float = 0.0

    # Set while the simulation runs
    fulfilled_time: Optional[float] = None
    pickup_time: Optional[float] = None
    driver_id: Optional[int] = None

    def wait_time(self) -> Optional[float]:
        if self.pickup_time is None or self.fulfilled_time is None:
            return None
        return self.pickup_time - self.fulfilled_time

    def total_time(self) -> Optional[float]:
        if self.pickup_time is None:
            return None
        return self.pickup_time - self.create_time


@dataclass(slots=True)
class Driver:
    id: int
    start_time: float
    pickup_delay: float
    order_id: Optional[str] = None

    arrive_time: Optional[float] = None
    pickup_time: Optional[float] = None

    def wait_time(self) -> Optional[float]:
        if self.pickup_time is None or self.arrive_time is None:
            return None
        return self.pickup_time - self.arrive_time


@dataclass(slots=True)
class Event:
    timestamp: float
    kind: str  # "order_received", "dispatch_driver", "order_prepared", "driver_arrived", "pickup"
    order_id: Optional[str] = None
    driver_id: Optional[int] = None
