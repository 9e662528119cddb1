# ==============================================================================
# ORDER RULE TESTS
# ==============================================================================
# Status transitions, money rounding and order numbers
# ==============================================================================

import re
from decimal import Decimal

import pytest

from roastery.core.exceptions import BadRequestError
from roastery.domain_models.order import OrderStatus
from roastery.services.order_service import parse_status_filter
from roastery.utils.helpers import format_money, generate_order_number, to_money


class TestStatusTransitions:

    @pytest.mark.parametrize(
        "current, target",
        [
            (OrderStatus.PENDING, OrderStatus.PROCESSING),
            (OrderStatus.PENDING, OrderStatus.SHIPPED),
            (OrderStatus.PROCESSING, OrderStatus.REFUNDED),
            (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
            (OrderStatus.DELIVERED, OrderStatus.REFUNDED),
            (OrderStatus.CANCELLED, OrderStatus.REFUNDED),
            (OrderStatus.REFUNDED, OrderStatus.REFUNDED),
        ],
    )
    def test_allowed(self, current, target):
        assert current.can_transition_to(target)

    @pytest.mark.parametrize(
        "current, target",
        [
            (OrderStatus.PENDING, OrderStatus.DELIVERED),
            (OrderStatus.SHIPPED, OrderStatus.PENDING),
            (OrderStatus.DELIVERED, OrderStatus.SHIPPED),
            (OrderStatus.CANCELLED, OrderStatus.PROCESSING),
            (OrderStatus.REFUNDED, OrderStatus.PENDING),
        ],
    )
    def test_rejected(self, current, target):
        assert not current.can_transition_to(target)

    def test_refunded_is_terminal(self):
        assert OrderStatus.REFUNDED.allowed_transitions == frozenset()


class TestStatusFilter:

    def test_all_means_no_filter(self):
        assert parse_status_filter("all") is None
        assert parse_status_filter(None) is None

    def test_known_status(self):
        assert parse_status_filter("shipped") == OrderStatus.SHIPPED

    def test_unknown_status(self):
        with pytest.raises(BadRequestError):
            parse_status_filter("lost")


class TestMoney:

    def test_half_up_rounding(self):
        assert to_money(Decimal("1.005")) == Decimal("1.01")
        assert to_money("2.344") == Decimal("2.34")
        assert to_money(None) == Decimal("0.00")

    def test_format(self):
        assert format_money(Decimal("5")) == "5.00"
        assert format_money(None) == ""


class TestOrderNumber:

    def test_format(self):
        number = generate_order_number(now_ms=1760000000000)

        assert re.match(r"^ORD-1760000000000-[0-9a-z]{9}$", number)

    def test_unique(self):
        assert len({generate_order_number() for _ in range(200)}) == 200


class TestHttpEmailSender:

    @pytest.mark.asyncio
    async def test_disabled_sender_does_not_deliver(self):
        from roastery.integrations.email import EmailMessage, HttpEmailSender

        sender = HttpEmailSender(enabled=False)
        message = EmailMessage(to="a@example.com", subject="Hi", html="<p>Hi</p>", text="Hi")

        assert await sender.send(message) is False

    @pytest.mark.asyncio
    async def test_missing_key_is_notification_error(self):
        from roastery.core.exceptions import NotificationError
        from roastery.integrations.email import EmailMessage, HttpEmailSender

        sender = HttpEmailSender(enabled=True)
        sender._api_key = None
        message = EmailMessage(to="a@example.com", subject="Hi", html="<p>Hi</p>", text="Hi")

        with pytest.raises(NotificationError):
            await sender.send(message)
