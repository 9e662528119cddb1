# ==============================================================================
# ORDER EXPORT TESTS
# ==============================================================================
# CSV row layout and the export endpoint
# ==============================================================================

import csv
import io
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from httpx import AsyncClient

from roastery.core.constants import ExportConstants
from roastery.domain_models.order import Order, OrderItem, OrderStatus, PaymentStatus
from roastery.services.order_export import (
    build_export_rows,
    export_filename,
    format_address,
    format_export_date,
    iter_csv,
)

TOTAL = ExportConstants.HEADER.index("Total")
ITEM_NAME = ExportConstants.HEADER.index("Item Name")
NOTES = ExportConstants.HEADER.index("Notes")


def _order(number: str, items: list, notes: str = None) -> Order:
    return Order(
        order_number=number,
        customer_email="guest@example.com",
        status=OrderStatus.PENDING,
        payment_status=PaymentStatus.PAID,
        subtotal=Decimal("30.00"),
        tax_amount=Decimal("0.00"),
        shipping_amount=Decimal("5.00"),
        total_amount=Decimal("35.00"),
        currency="USD",
        payment_method="card",
        shipping_method="standard",
        notes=notes,
        items=items,
        status_events=[],
    )


def _item(position: int, name: str, price: str, quantity: int = 1) -> OrderItem:
    unit = Decimal(price)
    return OrderItem(
        position=position,
        product_name=name,
        quantity=quantity,
        unit_price=unit,
        total_price=unit * quantity,
    )


class TestExportRows:
    """Tests for the CSV row builder."""

    def test_totals_only_on_first_row_of_each_order(self):
        orders = [
            _order("ORD-1", [_item(0, "House", "10.00"), _item(1, "Decaf", "20.00")]),
            _order("ORD-2", [_item(0, "Espresso", "30.00")]),
        ]

        rows = build_export_rows(orders)

        assert len(rows) == 3
        assert all(len(row) == len(ExportConstants.HEADER) for row in rows)
        assert [row[0] for row in rows] == ["ORD-1", "ORD-1", "ORD-2"]
        assert [row[TOTAL] for row in rows] == ["35.00", "", "35.00"]
        assert [row[ITEM_NAME] for row in rows] == ["House", "Decaf", "Espresso"]

    def test_two_item_order_and_empty_order(self):
        orders = [
            _order("ORD-A", [_item(0, "House", "10.00"), _item(1, "Decaf", "20.00")]),
            _order("ORD-B", []),
        ]

        rows = build_export_rows(orders)

        assert len(rows) == 3
        assert [row[TOTAL] for row in rows] == ["35.00", "", "35.00"]
        assert rows[2][ITEM_NAME] == ""

    def test_order_without_items_still_exports(self):
        rows = build_export_rows([_order("ORD-3", [], notes="line one\nline two")])

        assert len(rows) == 1
        assert rows[0][ITEM_NAME] == ""
        assert rows[0][TOTAL] == "35.00"
        assert rows[0][NOTES] == "line one line two"
        assert rows[0][ExportConstants.HEADER.index("Customer Name")] == "Guest"

    def test_csv_quotes_embedded_commas(self):
        rows = build_export_rows([_order("ORD-4", [_item(0, 'Blend "No. 5", dark', "9.00")])])

        text = "".join(iter_csv(rows))
        parsed = list(csv.reader(io.StringIO(text)))

        assert parsed[0] == list(ExportConstants.HEADER)
        assert parsed[1][ITEM_NAME] == 'Blend "No. 5", dark'
        assert text.endswith("\r\n")

    def test_formatters(self):
        moment = datetime(2025, 3, 7, 15, 4, tzinfo=timezone.utc)

        assert format_export_date(moment) == "03/07/2025, 03:04 PM"
        assert format_export_date(None) == ""
        assert format_address(
            {"street": "1 Main St", "city": "Austin", "state": "TX", "zipCode": "78701"}
        ) == "1 Main St, Austin, TX, 78701"
        assert export_filename(moment) == "orders-export-2025-03-07.csv"


class TestExportEndpoint:
    """Tests for GET /api/v1/admin/orders/export."""

    @pytest.mark.asyncio
    async def test_export_download(
        self, client: AsyncClient, admin_headers: dict, placed_order: dict
    ):
        response = await client.get("/api/v1/admin/orders/export", headers=admin_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        disposition = response.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="orders-export-')
        assert disposition.endswith('.csv"')

        parsed = list(csv.reader(io.StringIO(response.text)))
        assert parsed[0] == list(ExportConstants.HEADER)
        assert len(parsed) == 2
        assert parsed[1][0] == placed_order["orderId"]
        assert parsed[1][TOTAL] == "24.99"

    @pytest.mark.asyncio
    async def test_export_status_filter(
        self, client: AsyncClient, admin_headers: dict, placed_order: dict
    ):
        response = await client.get(
            "/api/v1/admin/orders/export",
            params={"status": "shipped"},
            headers=admin_headers,
        )

        parsed = list(csv.reader(io.StringIO(response.text)))
        assert len(parsed) == 1

    @pytest.mark.asyncio
    async def test_export_requires_admin(self, client: AsyncClient):
        response = await client.get("/api/v1/admin/orders/export")

        assert response.status_code == 401
