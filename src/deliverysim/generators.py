from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from .models import OrderRecord

DISHES = (
    "Banana Split", "Cheese Pizza", "Cobb Salad", "Pad Thai", "Beef Burrito",
    "Poke Bowl", "Ramen", "Falafel Wrap", "Chicken Curry", "Caesar Salad",
)


@dataclass(slots=True)
class WorkloadConfig:
    num_orders: int
    fulfil_time_dist: str = "uniform"  # "uniform" | "expon_tail"
    seed: int = 123


def generate_orders(config: WorkloadConfig) -> List[OrderRecord]:
    rng = np.random.default_rng(config.seed)

    if config.fulfil_time_dist == "uniform":
        fulfil_times = rng.uniform(2.0, 20.0, size=config.num_orders)
    elif config.fulfil_time_dist == "expon_tail":
        fulfil_times = np.clip(rng.exponential(scale=8.0, size=config.num_orders), 1.0, 40.0)
    else:
        raise ValueError(f"invalid fulfil_time_dist: {config.fulfil_time_dist}")

    names = rng.choice(len(DISHES), size=config.num_orders)
    return [
        OrderRecord(id=f"order-{i+1}", name=DISHES[int(names[i])], fulfil_time=round(float(fulfil_times[i]), 3))
        for i in range(config.num_orders)
    ]
