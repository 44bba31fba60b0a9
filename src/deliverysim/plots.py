from __future__ import annotations

from pathlib import Path
from typing import Dict

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .sim.metrics import DeliverySummary


def plot_wait_bars(summaries: Dict[str, DeliverySummary], title: str, out: Path) -> None:
    """Order and driver average wait side by side, one group per matching mode."""
    modes = list(summaries.keys())
    order_wait = [summaries[m].avg_order_wait_ms for m in modes]
    driver_wait = [summaries[m].avg_driver_wait_ms for m in modes]
    x = np.arange(len(modes))
    width = 0.38
    fig, ax = plt.subplots(figsize=(8, 5))
    bars = [
        ax.bar(x - width / 2, order_wait, width, label="order waits for driver", color="#4C78A8"),
        ax.bar(x + width / 2, driver_wait, width, label="driver waits for order", color="#F58518"),
    ]
    for group in bars:
        ax.bar_label(group, fmt="%d", fontsize=8)
    ax.set_title(title)
    ax.set_ylabel("average wait (ms)")
    ax.set_xticks(x)
    ax.set_xticklabels(modes)
    ax.legend()
    fig.savefig(out, dpi=150, bbox_inches="tight", pad_inches=0.1)
    plt.close(fig)


def plot_timeline(df_orders: pd.DataFrame, title: str, out: Path, max_orders: int = 12) -> None:
    """One row per order: preparation in green, waiting for a driver in orange."""
    d = df_orders.dropna(subset=["pickup_time"]).sort_values("create_time").head(max_orders)
    fig, ax = plt.subplots(figsize=(9, 5))
    for row_idx, (_, row) in enumerate(d.iterrows()):
        y = (row_idx * 10, 9)
        ax.broken_barh([(row["create_time"], row["fulfilled_time"] - row["create_time"])], y, facecolors="#54A24B")
        if row["wait_time"] > 0:
            ax.broken_barh([(row["fulfilled_time"], row["wait_time"])], y, facecolors="#F58518")
    ax.set_yticks([i * 10 + 4.5 for i in range(len(d))])
    ax.set_yticklabels(list(d["id"]))
    ax.set_xlabel("time (s)")
    ax.set_ylabel("order")
    ax.set_title(title)
    plt.subplots_adjust(bottom=0.2, top=0.9)
    fig.savefig(out, dpi=150, bbox_inches="tight", pad_inches=0.1)
    plt.close(fig)
