"""
Tests for the simulated payment flow.
"""
import asyncio

import pytest

from kiosk_bot.payment import PaymentInProgressError, PaymentService
from kiosk_bot.store.cart import NoActiveOrderError
from kiosk_bot.store.models import OrderStatus, PaymentMethod


@pytest.fixture
def ordered_kiosk(kiosk):
    kiosk.cart.add_item(kiosk.catalog.get_item("4"), 2)
    kiosk.cart.create_order()
    return kiosk


def test_pay_completes_order(ordered_kiosk):
    service = PaymentService(ordered_kiosk, processing_seconds=0)

    order = asyncio.run(service.pay(PaymentMethod.CASH))

    assert order.status == OrderStatus.COMPLETED
    assert order.payment_method == PaymentMethod.CASH
    assert ordered_kiosk.cart.current_order.status == OrderStatus.COMPLETED
    assert not service.is_processing


def test_pay_without_order(kiosk):
    service = PaymentService(kiosk, processing_seconds=0)
    with pytest.raises(NoActiveOrderError):
        asyncio.run(service.pay(PaymentMethod.CARD))


def test_paying_twice_returns_completed_order(ordered_kiosk):
    service = PaymentService(ordered_kiosk, processing_seconds=0)

    async def scenario():
        first = await service.pay(PaymentMethod.CARD)
        second = await service.pay(PaymentMethod.CASH)
        return first, second

    first, second = asyncio.run(scenario())
    assert second == first
    assert second.payment_method == PaymentMethod.CARD


def test_concurrent_payment_rejected(ordered_kiosk):
    service = PaymentService(ordered_kiosk, processing_seconds=0.05)

    async def scenario():
        task = asyncio.create_task(service.pay(PaymentMethod.CARD))
        await asyncio.sleep(0)
        assert service.is_processing
        with pytest.raises(PaymentInProgressError):
            await service.pay(PaymentMethod.CARD)
        return await task

    assert asyncio.run(scenario()).status == OrderStatus.COMPLETED


def test_close_during_processing(ordered_kiosk):
    service = PaymentService(ordered_kiosk, processing_seconds=0.05)

    async def scenario():
        task = asyncio.create_task(service.pay(PaymentMethod.CARD))
        await asyncio.sleep(0)
        service.close()
        with pytest.raises(NoActiveOrderError):
            await task

    asyncio.run(scenario())
    assert ordered_kiosk.cart.current_order is None


def test_close_frees_order_slot_unpaid(ordered_kiosk):
    PaymentService(ordered_kiosk).close()
    assert ordered_kiosk.cart.current_order is None
