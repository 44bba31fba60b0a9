import pytest

from deliverysim.data import load_orders
from deliverysim.errors import DataError
from deliverysim.generators import WorkloadConfig, generate_orders


def write(tmp_path, text):
    path = tmp_path / "orders.json"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_orders_keeps_file_order(tmp_path):
    path = write(tmp_path, '[{"id": "b", "name": "Yogurt", "fulfilTime": 6},'
                           ' {"id": "a", "name": "Acai Bowl", "fulfilTime": 12.5}]')
    recs = load_orders(path)
    assert [(r.id, r.name, r.fulfil_time) for r in recs] == [("b", "Yogurt", 6.0), ("a", "Acai Bowl", 12.5)]


def test_load_orders_accepts_prep_time_and_numeric_ids(tmp_path):
    recs = load_orders(write(tmp_path, '[{"id": 17, "name": "Ramen", "prepTime": 3}]'))
    assert recs[0].id == "17"
    assert recs[0].fulfil_time == 3.0


def test_empty_array(tmp_path):
    assert load_orders(write(tmp_path, "[]")) == []


@pytest.mark.parametrize("text", ["[{", '[{"id": "a", "name": "x"}]', '[{"id": "a", "name": "x", "fulfilTime": -2}]'])
def test_bad_data(tmp_path, text):
    with pytest.raises(DataError):
        load_orders(write(tmp_path, text))


def test_duplicate_ids_rejected(tmp_path):
    path = write(tmp_path, '[{"id": "x", "name": "A", "fulfilTime": 1}, {"id": "x", "name": "B", "fulfilTime": 2}]')
    with pytest.raises(DataError, match="duplicate ids: x"):
        load_orders(path)


def test_missing_file(tmp_path):
    with pytest.raises(DataError):
        load_orders(tmp_path / "missing.json")


def test_generate_orders_is_seeded():
    a = generate_orders(WorkloadConfig(num_orders=5, seed=9))
    b = generate_orders(WorkloadConfig(num_orders=5, seed=9))
    assert a == b
    assert [r.id for r in a] == [f"order-{i}" for i in range(1, 6)]
    assert all(2.0 <= r.fulfil_time <= 20.0 for r in a)
    tail = generate_orders(WorkloadConfig(num_orders=50, fulfil_time_dist="expon_tail", seed=9))
    assert all(1.0 <= r.fulfil_time <= 40.0 for r in tail)
    with pytest.raises(ValueError):
        generate_orders(WorkloadConfig(num_orders=1, fulfil_time_dist="normal"))
