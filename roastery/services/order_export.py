# ==============================================================================
# ORDER EXPORT - CSV Rows for the Back-Office
# ==============================================================================
# One row per line item; order-level money and fulfillment columns only on
# the first row of each order
# ==============================================================================

from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

from roastery.core.constants import ExportConstants
from roastery.domain_models.order import Order
from roastery.utils.helpers import as_utc, format_money

ExportRow = List[str]


def format_export_date(value: Optional[datetime]) -> str:
    """``MM/DD/YYYY, HH:MM AM`` in UTC, or "" when missing."""
    if value is None:
        return ""
    return as_utc(value).strftime(ExportConstants.DATE_FORMAT)


def format_address(address: Optional[Dict[str, Any]]) -> str:
    if not address:
        return ""
    parts = (
        address.get("street"),
        address.get("city"),
        address.get("state"),
        address.get("zipCode"),
        address.get("country"),
    )
    return ", ".join(str(part) for part in parts if part)


def _enum_value(value: Any) -> str:
    return getattr(value, "value", value) or ""


def order_rows(order: Order) -> List[ExportRow]:
    """CSV rows for one order (at least one, even without items)."""
    customer = order.customer
    if customer is not None and customer.full_name:
        customer_name = customer.full_name
    else:
        customer_name = ExportConstants.GUEST_NAME

    customer_email = (customer.email if customer else None) or order.customer_email or ""
    customer_phone = (customer.phone if customer else None) or ""

    order_columns = [
        order.order_number,
        format_export_date(order.created_at),
        _enum_value(order.status),
        _enum_value(order.payment_status),
        customer_name,
        customer_email,
        customer_phone,
        format_address(order.shipping_address),
        format_address(order.billing_address),
    ]
    totals_columns = [
        format_money(order.subtotal),
        format_money(order.tax_amount),
        format_money(order.shipping_amount),
        format_money(order.total_amount),
        order.currency or "",
        order.payment_method or "",
        format_export_date(order.shipped_at),
        format_export_date(order.delivered_at),
        order.tracking_number or "",
        (order.notes or "").replace("\r\n", " ").replace("\n", " "),
    ]
    blank_totals = [""] * len(totals_columns)

    if not order.items:
        return [order_columns + ["", "", "", "", ""] + totals_columns]

    rows: List[ExportRow] = []
    for index, item in enumerate(order.items):
        item_columns = [
            item.product_name or "",
            item.product_sku or "",
            str(item.quantity),
            format_money(item.unit_price),
            format_money(item.total_price),
        ]
        rows.append(
            order_columns + item_columns + (totals_columns if index == 0 else blank_totals)
        )
    return rows


def build_export_rows(orders: Iterable[Order]) -> List[ExportRow]:
    """Data rows (no header) for a sequence of orders, in the given order."""
    rows: List[ExportRow] = []
    for order in orders:
        rows.extend(order_rows(order))
    return rows


def iter_csv(rows: Sequence[ExportRow]) -> Iterator[str]:
    """
    Yield the header line and then one encoded line per row.

    Quoting follows RFC 4180 via the ``csv`` module.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n")

    def flush() -> str:
        value = buffer.getvalue()
        buffer.seek(0)
        buffer.truncate(0)
        return value

    writer.writerow(ExportConstants.HEADER)
    yield flush()
    for row in rows:
        writer.writerow(row)
        yield flush()


def export_filename(today: datetime) -> str:
    return ExportConstants.FILENAME_TEMPLATE.format(date=today.strftime("%Y-%m-%d"))
