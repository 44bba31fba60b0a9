import signal

import numpy as np
import pytest

from deliverysim.config import SimConfig
from deliverysim.generators import WorkloadConfig, generate_orders
from deliverysim.models import OrderRecord
from deliverysim.sim.app import App, run_simulation
from deliverysim.sim.scheduler import EventScheduler


def records(*fulfil_times):
    return [OrderRecord(id=f"order-{i}", name=f"dish-{i}", fulfil_time=f) for i, f in enumerate(fulfil_times, start=1)]


def test_orders_received_at_fixed_pace():
    cfg = SimConfig(match_driver_w_order=True, order_receive_interval=0.5, seed=1)
    result = App(cfg, records=records(3, 4, 5)).run()
    assert [o.create_time for o in result.orders] == [0.5, 1.0, 1.5]
    assert [d.id for d in result.drivers] == [1, 2, 3]
    for order, driver in zip(result.orders, result.drivers):
        assert order.driver_id == driver.id
        assert driver.order_id == order.id
        assert driver.start_time == order.create_time
        assert 3.0 <= driver.pickup_delay <= 15.0


@pytest.mark.parametrize("matched", [True, False])
def test_run_delivers_every_order(matched):
    cfg = SimConfig(match_driver_w_order=matched, seed=7)
    recs = generate_orders(WorkloadConfig(num_orders=25, seed=7))
    result = run_simulation(recs, cfg)

    manager = result.manager
    assert manager.orders_received == manager.orders_delivered == 25
    assert manager.pending() == (0, 0)
    assert result.summary is not None
    assert result.summary.orders_delivered == 25
    for order in result.orders:
        assert order.fulfilled_time >= order.create_time + order.fulfil_time - 1e-9
        assert order.pickup_time >= order.fulfilled_time
    for driver in result.drivers:
        assert driver.arrive_time >= driver.start_time + driver.pickup_delay - 1e-9
        assert driver.pickup_time >= driver.arrive_time


def test_final_averages_match_plain_means():
    cfg = SimConfig(match_driver_w_order=False, seed=3)
    result = run_simulation(generate_orders(WorkloadConfig(num_orders=10, seed=3)), cfg)
    stats = result.manager.stats
    assert stats.avg_order_prep_time == pytest.approx(np.mean([o.fulfil_time for o in result.orders]))
    assert stats.avg_driver_delay == pytest.approx(np.mean([d.pickup_delay for d in result.drivers]))
    assert stats.avg_order_wait_time == pytest.approx(np.mean([o.wait_time() for o in result.orders]))
    assert stats.avg_driver_wait_time == pytest.approx(np.mean([d.wait_time() for d in result.drivers]))


def test_empty_input_runs_nothing():
    result = App(SimConfig(), records=[]).run()
    assert result.orders == []
    assert result.summary is None
    assert result.manager.orders_received == 0


def test_shutdown_stops_intake_but_drains_pending_timers():
    scheduler = EventScheduler()
    app = App(SimConfig(match_driver_w_order=True, order_receive_interval=1.0, seed=0), records=records(*[2] * 10), scheduler=scheduler)
    # Intake stops after t=2.5: orders at t=1 and t=2 only
    scheduler.schedule_after(2.5, app.shutdown)
    result = app.run()
    assert len(result.orders) == 2
    assert result.manager.orders_delivered == 2
    assert all(o.pickup_time is not None for o in result.orders)
    assert len(app.records) == 8


def test_same_seed_same_run():
    recs = records(5, 1, 9, 3)
    a = run_simulation(recs, SimConfig(seed=42))
    b = run_simulation(recs, SimConfig(seed=42))
    assert [d.pickup_delay for d in a.drivers] == [d.pickup_delay for d in b.drivers]
    assert a.summary == b.summary


def test_reads_records_from_data_path(tmp_path):
    data = tmp_path / "orders.json"
    data.write_text('[{"id": "x1", "name": "Ramen", "fulfilTime": 2}]', encoding="utf-8")
    result = App(SimConfig(data_path=str(data), seed=0)).run()
    assert [o.id for o in result.orders] == ["x1"]
    assert result.summary.orders_delivered == 1


def test_uses_given_scheduler_and_rng():
    scheduler = EventScheduler()
    rng = np.random.default_rng(5)
    app = App(SimConfig(), records=[], scheduler=scheduler, rng=rng)
    assert app.scheduler is scheduler
    assert app.rng is rng


def test_realtime_sigint_stops_intake_and_restores_handler():
    cfg = SimConfig(
        match_driver_w_order=True, order_receive_interval=0.1,
        pickup_delay_min=0.05, pickup_delay_max=0.1, realtime=True, seed=0,
    )
    scheduler = EventScheduler(realtime=True)
    app = App(cfg, records=records(*[0.05] * 10), scheduler=scheduler)
    before = signal.getsignal(signal.SIGINT)
    scheduler.schedule_after(0.25, lambda _: signal.raise_signal(signal.SIGINT))

    result = app.run()

    assert app.shutting_down
    assert 1 <= len(result.orders) < 10
    assert len(app.records) == 10 - len(result.orders)
    assert result.manager.orders_delivered == len(result.orders)
    assert all(o.pickup_time is not None for o in result.orders)
    assert signal.getsignal(signal.SIGINT) is before
