import pytest
from pydantic import ValidationError

from retailpos.cart import CartEngine, generate_order_id
from retailpos.cart import engine as engine_module
from retailpos.errors import InvalidPriceError, InvalidQuantityError, LineNotFoundError


@pytest.fixture
def engine(order_ids):
    return CartEngine(order_id_factory=order_ids)


def test_generate_order_id_uses_last_six_millisecond_digits(monkeypatch):
    monkeypatch.setattr(engine_module.time, "time", lambda: 1700000123.5)
    assert generate_order_id() == "HD123500"
    assert generate_order_id(prefix="X") == "X123500"


def test_new_engine_is_empty_and_unlocked(engine):
    assert engine.is_empty
    assert not engine.locked
    assert engine.order_id == "HD000001"
    cart = engine.snapshot()
    assert cart.subtotal == 0
    assert cart.total == 0
    assert cart.payment_method == "cash"


def test_add_item_merges_and_locks(engine, coke):
    engine.add_item(coke)
    line = engine.add_item(coke, quantity=2)
    assert line.quantity == 3
    assert line.line_total == 36_000
    assert len(engine.lines) == 1
    assert engine.locked


def test_lines_keep_insertion_order(engine, coke, bread):
    engine.add_item(bread)
    engine.add_item(coke)
    engine.add_item(bread)
    assert [line.product_id for line in engine.lines] == [2, 1]


@pytest.mark.parametrize("quantity", [0, -2, 1.5, "abc"])
def test_add_item_rejects_bad_quantity(engine, coke, quantity):
    with pytest.raises(InvalidQuantityError):
        engine.add_item(coke, quantity=quantity)
    assert engine.is_empty
    assert not engine.locked


def test_order_id_frozen_once_locked(engine, coke):
    assert engine.regenerate_order_id() == "HD000002"
    engine.add_item(coke)
    assert engine.regenerate_order_id() == "HD000002"
    assert engine.snapshot().order_id == "HD000002"


def test_set_quantity_zero_or_negative_removes_line(engine, coke, bread):
    engine.add_item(coke)
    engine.add_item(bread)
    assert engine.set_quantity(1, 0) is None
    assert engine.set_quantity(2, -3) is None
    assert engine.is_empty


def test_set_quantity_updates_line(engine, coke):
    engine.add_item(coke)
    line = engine.set_quantity(1, "4")
    assert line.quantity == 4
    assert engine.snapshot().subtotal == 48_000


def test_set_quantity_rejects_fractions(engine, coke):
    engine.add_item(coke)
    with pytest.raises(InvalidQuantityError):
        engine.set_quantity(1, 2.5)
    assert engine.get_line(1).quantity == 1


def test_unknown_line(engine):
    with pytest.raises(LineNotFoundError):
        engine.set_quantity(99, 1)
    with pytest.raises(KeyError):
        engine.remove_item(99)


def test_set_item_price_rounds_and_clamps(engine, coke):
    engine.add_item(coke, quantity=2)
    line = engine.set_item_price(1, "10500.5", discount_percent=10)
    assert line.unit_price == 10_501
    assert line.discount_percent == 10.0
    assert line.line_total == 18_902

    line = engine.set_item_price(1, 10_000, discount_percent=150)
    assert line.discount_percent == 100.0
    assert line.line_total == 0


def test_set_item_price_rejects_negative(engine, coke):
    engine.add_item(coke)
    with pytest.raises(InvalidPriceError):
        engine.set_item_price(1, -1)
    assert engine.get_line(1).unit_price == 12_000


def test_non_numeric_price_becomes_zero(engine, coke):
    engine.add_item(coke)
    assert engine.set_item_price(1, "abc").unit_price == 0


def test_remove_last_item_keeps_lock_and_id(engine, coke):
    engine.add_item(coke)
    order_id = engine.order_id
    engine.remove_item(1)
    assert engine.is_empty
    assert engine.locked
    assert engine.order_id == order_id


def test_totals(engine, coke, bread):
    engine.add_item(coke, quantity=2)
    engine.add_item(bread)
    engine.set_item_price(2, 25_000, discount_percent=10)
    engine.set_order_discount_percent(10)
    engine.set_received_amount(50_000)

    cart = engine.snapshot()
    assert [line.line_total for line in cart.items] == [24_000, 22_500]
    assert cart.subtotal == 46_500
    assert cart.order_discount_amount == 4_650
    assert cart.total == 41_850
    assert cart.change == 8_150
    assert cart.item_count == 3


def test_order_discount_is_clamped(engine, coke):
    engine.add_item(coke)
    assert engine.set_order_discount_percent(150) == 100.0
    assert engine.snapshot().total == 0
    assert engine.set_order_discount_percent("abc") == 0.0
    assert engine.snapshot().total == 12_000


def test_change_never_negative(engine, coke):
    engine.add_item(coke)
    engine.set_received_amount(5_000)
    assert engine.snapshot().change == 0
    assert engine.set_received_amount("abc") == 0
    assert engine.set_received_amount(-10) == 0


def test_transfer_receives_exact_total(engine, coke):
    engine.add_item(coke, quantity=2)
    engine.set_payment_method("transfer")
    cart = engine.snapshot()
    assert cart.received_amount == 24_000
    assert cart.change == 0


def test_unknown_payment_method(engine):
    with pytest.raises(ValueError):
        engine.set_payment_method("bitcoin")


def test_order_level_edit_marks_dirty(engine):
    assert not engine.is_dirty
    engine.set_order_discount_percent(5)
    assert engine.is_dirty
    assert not engine.locked


def test_reset(engine, coke):
    engine.add_item(coke)
    engine.set_order_discount_percent(5)
    engine.set_payment_method("card")
    new_id = engine.reset()
    assert new_id == "HD000002"
    assert engine.is_empty
    assert not engine.locked
    assert not engine.is_dirty
    cart = engine.snapshot()
    assert cart.order_discount_percent == 0.0
    assert cart.payment_method == "cash"
    assert cart.received_amount == 0


def test_repeated_snapshots_are_identical(engine, coke, bread):
    engine.add_item(coke, quantity=3)
    engine.add_item(bread)
    engine.set_item_price(bread.id, 24_000, discount_percent=12.5)
    engine.set_order_discount_percent(10)
    engine.set_received_amount(100_000)

    first, second = engine.snapshot(), engine.snapshot()
    assert first == second
    assert first.model_dump() == second.model_dump()
    assert first.total == second.total
    assert first.change == second.change


def test_snapshots_are_immutable(engine, coke):
    engine.add_item(coke)
    before = engine.snapshot()
    engine.add_item(coke)
    assert before.subtotal == 12_000
    assert engine.snapshot().subtotal == 24_000
    with pytest.raises(ValidationError):
        before.received_amount = 1
