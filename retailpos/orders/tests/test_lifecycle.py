from unittest.mock import Mock

import pytest

from retailpos.cart import CartEngine
from retailpos.errors import (
    EmptyCartError,
    OrderAlreadySubmittedError,
    SubmissionError,
    SubmissionInProgressError,
)
from retailpos.models import Customer, Order
from retailpos.orders import CheckoutState, OrderLifecycleController, build_order_request


def stored(data=None):
    """create_order side effect that echoes the request back with server fields."""
    def create_order(request):
        return Order.from_response(data or {"id": 7, "order_number": "DH00007"}, request)
    return create_order


@pytest.fixture
def engine(order_ids):
    return CartEngine(order_id_factory=order_ids)


@pytest.fixture
def storage():
    storage = Mock()
    storage.create_order.side_effect = stored()
    return storage


@pytest.fixture
def controller(engine, storage):
    return OrderLifecycleController(engine, storage)


def test_build_order_request_rejects_empty_cart(engine):
    with pytest.raises(EmptyCartError):
        build_order_request(engine.snapshot())


def test_build_order_request_copies_cart(engine, coke, bread):
    engine.add_item(coke, quantity=2)
    engine.add_item(bread)
    engine.set_order_discount_percent(10)
    engine.set_received_amount(50_000)
    cart = engine.snapshot()

    request = build_order_request(cart)
    assert request.order_number == cart.order_id
    assert request.customer_id is None
    assert request.customer_name == "Khách Lẻ"
    assert [i.total for i in request.items] == [24_000, 25_000]
    assert request.subtotal == 49_000
    assert request.discount_amount == 4_900
    assert request.total_amount == 44_100
    assert request.change_amount == 5_900
    assert request.payment_status == "paid"
    assert request.notes == ""


def test_build_order_request_delivery(engine, coke):
    engine.add_item(coke)
    customer = Customer(id=3, name="Anh Hòa", phone="0901234567")
    request = build_order_request(engine.snapshot(), customer=customer, intent="delivery")
    assert request.payment_status == "unpaid"
    assert request.notes == "Giao hàng"
    assert request.customer_id == 3
    assert request.customer_name == "Anh Hòa"
    assert request.customer_phone == "0901234567"


def test_initial_states(controller, engine, coke):
    assert controller.state is CheckoutState.EMPTY
    engine.set_order_discount_percent(5)
    assert controller.state is CheckoutState.BUILDING
    engine.add_item(coke)
    assert controller.state is CheckoutState.LOCKED


def test_empty_cart_never_reaches_storage(controller, storage):
    with pytest.raises(EmptyCartError):
        controller.submit()
    storage.create_order.assert_not_called()
    assert controller.state is CheckoutState.EMPTY


def test_submit_success(controller, engine, storage, coke):
    engine.add_item(coke)
    order = controller.submit(notes="ít đá")

    assert controller.state is CheckoutState.COMPLETED
    assert controller.last_order is order
    assert order.display_number == "DH00007"
    assert order.client_order_id == engine.order_id
    assert order.notes == "ít đá"
    request = storage.create_order.call_args.args[0]
    assert request.order_number == engine.order_id
    assert request.total_amount == 12_000


def test_failure_keeps_cart_and_id_for_retry(controller, engine, storage, coke):
    engine.add_item(coke)
    order_id = engine.order_id
    attempts = []

    def flaky(request):
        attempts.append(request)
        if len(attempts) == 1:
            raise SubmissionError("Sản phẩm hết hàng", status_code=400)
        return stored()(request)

    storage.create_order.side_effect = flaky

    with pytest.raises(SubmissionError) as exc:
        controller.submit()
    assert exc.value.message == "Sản phẩm hết hàng"
    assert controller.state is CheckoutState.FAILED
    assert controller.last_error is exc.value
    assert not engine.is_empty
    assert engine.order_id == order_id

    order = controller.submit()
    assert controller.state is CheckoutState.COMPLETED
    assert controller.last_error is None
    first, second = [c.args[0] for c in storage.create_order.call_args_list]
    assert first.order_number == second.order_number == order_id
    assert order.client_order_id == order_id


def test_unexpected_error_is_wrapped(controller, engine, storage, coke):
    engine.add_item(coke)
    boom = ConnectionError("connection reset")
    storage.create_order.side_effect = boom

    with pytest.raises(SubmissionError) as exc:
        controller.submit()
    assert exc.value.message == "connection reset"
    assert exc.value.__cause__ is boom
    assert controller.state is CheckoutState.FAILED


def test_unexpected_error_without_text_uses_generic_message(controller, engine, storage, coke):
    engine.add_item(coke)
    storage.create_order.side_effect = RuntimeError()
    with pytest.raises(SubmissionError) as exc:
        controller.submit()
    assert exc.value.message == SubmissionError.GENERIC_MESSAGE


def test_completed_order_cannot_be_resubmitted(controller, engine, storage, coke):
    engine.add_item(coke)
    controller.submit()
    with pytest.raises(OrderAlreadySubmittedError):
        controller.submit()
    assert storage.create_order.call_count == 1


class ReentrantStorage:
    """Tries a second submit while the first one is still inside create_order."""

    def __init__(self):
        self.controller = None
        self.state_during = None
        self.inner_error = None

    def create_order(self, request):
        self.state_during = self.controller.state
        try:
            self.controller.submit()
        except SubmissionInProgressError as e:
            self.inner_error = e
        return Order.from_response({"id": 1}, request)


def test_second_submit_while_in_flight_is_rejected(engine, coke):
    storage = ReentrantStorage()
    controller = OrderLifecycleController(engine, storage)
    storage.controller = controller
    engine.add_item(coke)

    order = controller.submit()

    assert storage.state_during is CheckoutState.SUBMITTING
    assert isinstance(storage.inner_error, SubmissionInProgressError)
    assert order.id == 1
    assert controller.state is CheckoutState.COMPLETED


def test_reset_starts_next_transaction(controller, engine, coke):
    engine.add_item(coke)
    controller.submit()
    old_id = engine.order_id
    new_id = controller.reset()
    assert new_id != old_id
    assert controller.state is CheckoutState.EMPTY
    assert engine.is_empty
