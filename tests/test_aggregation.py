from datetime import date, timedelta
from decimal import Decimal
from types import SimpleNamespace

from courtdesk.models.enums import PaymentMethod
from courtdesk.services.aggregation import (
    dashboard_figures,
    format_change,
    global_totals,
    ledger_revenue,
    live_booking_revenue,
    occupancy,
    operation_count,
    percentage_change,
    revenue_by_method,
    weekly_series,
)

DAY = date(2031, 3, 3)


def entry(type, amount=None, method=None, timestamp="2031-03-03T15:00:00.000Z"):
    return SimpleNamespace(type=type, amount=amount, method=method, timestamp=timestamp)


def booking(status="pending", price="10000", payment_method=None, day=DAY):
    return SimpleNamespace(status=status, price=Decimal(price), payment_method=payment_method, date=day)


def test_percentage_change():
    assert percentage_change(Decimal("150"), Decimal("100")) == 50
    assert percentage_change(Decimal("80"), Decimal("100")) == -20
    assert percentage_change(Decimal("500"), Decimal("0")) == 0
    assert percentage_change(Decimal("0"), Decimal("0")) == 0


def test_percentage_change_rounds_half_up():
    assert percentage_change(Decimal("100.5"), Decimal("100")) == 1
    assert percentage_change(Decimal("99.5"), Decimal("100")) == 0
    assert percentage_change(Decimal("98.5"), Decimal("100")) == -1


def test_format_change():
    assert format_change(50) == "+50%"
    assert format_change(-20) == "-20%"
    assert format_change(0) == "0%"


def test_ledger_revenue_counts_sales_bookings_and_shifts():
    entries = [
        entry("sale", Decimal("3000"), "cash"),
        entry("booking", Decimal("20000"), "qr"),
        entry("shift", Decimal("5000")),
        entry("stock"),
        entry("sale", Decimal("999"), "cash", timestamp="2031-03-02T23:59:59.999Z"),
    ]

    assert ledger_revenue(entries, DAY) == Decimal("28000")
    assert operation_count(entries, DAY) == 4


def test_revenue_by_method_has_three_buckets():
    entries = [
        entry("sale", Decimal("3000"), "cash"),
        entry("sale", Decimal("2000"), "cash"),
        entry("booking", Decimal("20000"), "transfer"),
        entry("shift", Decimal("5000"), "cash"),
        entry("booking", Decimal("7000")),
    ]

    buckets = revenue_by_method(entries, DAY)

    assert [method.value for method in buckets] == ["cash", "qr", "transfer"]
    assert buckets[PaymentMethod.CASH] == Decimal("5000")
    assert buckets[PaymentMethod.QR] == Decimal("0")
    assert buckets[PaymentMethod.TRANSFER] == Decimal("20000")


def test_live_booking_revenue_uses_recognition_rule():
    bookings = [
        booking(status="confirmed", price="20000"),
        booking(status="pending", price="15000"),
        booking(status="pending", price="12000", payment_method="cash"),
        booking(status="cancelled", price="9000", payment_method="qr"),
        booking(status="confirmed", price="30000", day=DAY - timedelta(days=1)),
    ]

    assert live_booking_revenue(bookings, DAY) == Decimal("41000")
    assert occupancy(bookings, DAY) == 2


def test_weekly_series_spans_seven_days():
    bookings = [
        booking(status="confirmed", price="20000"),
        booking(status="confirmed", price="10000", day=DAY - timedelta(days=6)),
        booking(status="confirmed", price="10000", day=DAY - timedelta(days=7)),
    ]

    series = weekly_series(bookings, DAY)

    assert [point.date for point in series] == [DAY - timedelta(days=n) for n in range(6, -1, -1)]
    assert series[0].revenue == Decimal("10000")
    assert series[-1].revenue == Decimal("20000")
    assert series[-1].bookings == 1


def test_global_totals_add_history():
    entries = [
        entry("sale", Decimal("1000"), "cash"),
        entry("booking", Decimal("20000"), "qr"),
        entry("shift", Decimal("50000")),
    ]
    expenses = [SimpleNamespace(amount=Decimal("4000"))]
    summaries = [SimpleNamespace(total_income=Decimal("100000"), total_expenses=Decimal("0"))]

    totals = global_totals(entries, expenses, summaries)

    assert totals.current_income == Decimal("21000")
    assert totals.historical_income == Decimal("100000")
    assert totals.total_income == Decimal("121000")
    assert totals.total_expenses == Decimal("4000")
    assert totals.net_income == Decimal("117000")


def test_dashboard_figures():
    bookings = [
        booking(status="confirmed", price="15000"),
        booking(status="confirmed", price="10000", day=DAY - timedelta(days=1)),
    ]
    products = [
        SimpleNamespace(id=1, name="Gatorade", stock=2, min_stock_alert=5),
        SimpleNamespace(id=2, name="Agua", stock=20, min_stock_alert=5),
    ]

    figures = dashboard_figures(bookings, [entry("sale", Decimal("3000"), "qr")], products, DAY)

    assert figures["today_revenue"] == Decimal("15000")
    assert figures["revenue_change"] == 50
    assert figures["revenue_change_label"] == "+50%"
    assert figures["active_bookings"] == 2
    assert figures["ledger_revenue_today"] == Decimal("3000")
    assert [item.name for item in figures["low_stock"]] == ["Gatorade"]
