from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import asdict, replace
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd

from .config import DEFAULT_CONFIG_PATH, SimConfig, load_config
from .data import load_orders
from .errors import DeliverySimError
from .generators import WorkloadConfig, generate_orders
from .models import OrderRecord
from .plots import plot_timeline, plot_wait_bars
from .sim.app import App
from .sim.metrics import DeliverySummary, drivers_to_dataframe, events_to_dataframe, orders_to_dataframe

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT, handlers=handlers, force=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="deliverysim: food delivery order/driver matching simulation"
    )
    parser.add_argument("--config", type=str, default=None, help=f"JSON config file (default: {DEFAULT_CONFIG_PATH} if present)")
    parser.add_argument("--data", type=str, default=None, help="JSON array of orders {id, name, fulfilTime}")
    parser.add_argument("--generate", type=int, default=None, metavar="N", help="Generate N synthetic orders instead of reading --data")
    parser.add_argument("--seed", type=int, default=None, help="Seed for pickup delays and generated orders")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--matched", dest="matched", action="store_true", default=None, help="Pair each order with its own driver")
    mode.add_argument("--unmatched", dest="matched", action="store_false", help="Pair orders with any available driver, FIFO")
    parser.add_argument("--realtime", action="store_true", help="Wait on the wall clock instead of simulated time")
    parser.add_argument("--interval", type=float, default=None, help="Seconds between incoming orders")
    parser.add_argument("--outputs", type=str, default="outputs", help="Output directory for CSV/JSON/PNG")
    parser.add_argument("--compare", action="store_true", help="Run both matching modes on the same orders and plot them")
    parser.add_argument("--log-level", type=str, default="INFO")
    parser.add_argument("--log-file", type=str, default=None)
    return parser


def resolve_config(args: argparse.Namespace) -> SimConfig:
    if args.config is not None:
        cfg = load_config(args.config)
    elif DEFAULT_CONFIG_PATH.exists():
        cfg = load_config(DEFAULT_CONFIG_PATH)
    else:
        cfg = SimConfig()

    overrides: Dict[str, object] = {}
    if args.matched is not None:
        overrides["match_driver_w_order"] = args.matched
    if args.realtime:
        overrides["realtime"] = True
    if args.interval is not None:
        overrides["order_receive_interval"] = args.interval
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.data is not None:
        overrides["data_path"] = args.data
    cfg = replace(cfg, **overrides)
    cfg.validate()
    return cfg


def resolve_records(args: argparse.Namespace, cfg: SimConfig) -> List[OrderRecord]:
    if args.generate is not None:
        seed = cfg.seed if cfg.seed is not None else 123
        return generate_orders(WorkloadConfig(num_orders=args.generate, seed=seed))
    return load_orders(cfg.data_path)


def run(args: argparse.Namespace) -> int:
    cfg = resolve_config(args)
    records = resolve_records(args, cfg)

    outputs_dir = Path(args.outputs)
    outputs_dir.mkdir(parents=True, exist_ok=True)

    configs = [cfg]
    if args.compare:
        configs = [replace(cfg, match_driver_w_order=m) for m in (True, False)]

    all_summaries: List[Dict] = []
    summary_by_mode: Dict[str, DeliverySummary] = {}

    for run_cfg in configs:
        app = App(run_cfg, records=records)
        result = app.run()

        df_orders = orders_to_dataframe(result.orders)
        df_orders.to_csv(outputs_dir / f"{result.mode}_orders.csv", index=False)
        drivers_to_dataframe(result.drivers).to_csv(outputs_dir / f"{result.mode}_drivers.csv", index=False)
        events_to_dataframe(result.events).to_csv(outputs_dir / f"{result.mode}_events.csv", index=False)

        if result.summary is None:
            logger.warning("No orders delivered in %s mode", result.mode)
            continue
        all_summaries.append({"mode": result.mode, **asdict(result.summary)})
        summary_by_mode[result.mode] = result.summary

        if args.compare:
            plot_timeline(df_orders, f"Order timeline ({result.mode})", outputs_dir / f"{result.mode}_timeline.png")

    df_summary = pd.DataFrame(all_summaries)
    (outputs_dir / "summaries.json").write_text(df_summary.to_json(orient="records", indent=2), encoding="utf-8")

    if args.compare and summary_by_mode:
        plot_wait_bars(summary_by_mode, "Average wait by matching mode", outputs_dir / "wait_bars.png")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, Path(args.log_file) if args.log_file else None)
    try:
        return run(args)
    except DeliverySimError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
