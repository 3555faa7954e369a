"""Financial and occupancy rollups derived from the ledger and bookings.

Two revenue figures coexist on purpose and must not be merged:

* ``ledger_revenue`` sums ledger amounts (what the cashbox shows).
* ``live_booking_revenue`` sums current booking prices using the
  revenue-recognition rule (what the dashboard cards and weekly chart show).
"""
from collections import OrderedDict
from datetime import date, timedelta
from decimal import Decimal, ROUND_FLOOR
from typing import Dict, Iterable, List

from courtdesk.core.clock import day_key
from courtdesk.models.enums import ActivityType, BookingStatus, PaymentMethod
from courtdesk.schemas.cashbox import MethodBucket
from courtdesk.schemas.reports import DailyPoint, FinancialTotals, LowStockItem
from courtdesk.services.booking_service import is_revenue_recognized
from courtdesk.services.ledger import entries_for_day

ZERO = Decimal("0")

CASHBOX_INCOME_TYPES = frozenset({ActivityType.SALE, ActivityType.BOOKING, ActivityType.SHIFT})
INCOME_TYPES = frozenset({ActivityType.SALE, ActivityType.BOOKING})

# Fixed bucket order; entries without a method have no bucket
METHOD_BUCKETS = (PaymentMethod.CASH, PaymentMethod.QR, PaymentMethod.TRANSFER)


def _amount(value) -> Decimal:
    return Decimal(str(value)) if value is not None else ZERO


def _is_type(entry, types) -> bool:
    return ActivityType(entry.type) in types


def ledger_revenue(entries: Iterable, day, types=CASHBOX_INCOME_TYPES) -> Decimal:
    """Sum of ledger amounts on a day for the given entry types."""
    return sum(
        (_amount(entry.amount) for entry in entries_for_day(entries, day) if _is_type(entry, types)),
        ZERO,
    )


def revenue_by_method(entries: Iterable, day) -> "OrderedDict[PaymentMethod, Decimal]":
    """Sale and booking income on a day split into the cash/QR/transfer buckets."""
    buckets: "OrderedDict[PaymentMethod, Decimal]" = OrderedDict((method, ZERO) for method in METHOD_BUCKETS)
    for entry in entries_for_day(entries, day):
        if not _is_type(entry, INCOME_TYPES) or not entry.amount or not entry.method:
            continue
        method = PaymentMethod(entry.method)
        buckets[method] += _amount(entry.amount)
    return buckets


def method_buckets(entries: Iterable, day) -> List[MethodBucket]:
    return [
        MethodBucket(method=method.value, amount=amount)
        for method, amount in revenue_by_method(entries, day).items()
    ]


def operation_count(entries: Iterable, day) -> int:
    return len(entries_for_day(entries, day))


def live_booking_revenue(bookings: Iterable, day: date) -> Decimal:
    """Prices of the day's bookings that count as revenue right now."""
    return sum(
        (_amount(b.price) for b in bookings if b.date == day and is_revenue_recognized(b)),
        ZERO,
    )


def occupancy(bookings: Iterable, day: date) -> int:
    """Number of live (non-cancelled) bookings on a day."""
    return sum(1 for b in bookings if b.date == day and b.status != BookingStatus.CANCELLED)


def active_bookings(bookings: Iterable) -> int:
    return sum(1 for b in bookings if b.status == BookingStatus.CONFIRMED)


def percentage_change(today, yesterday) -> int:
    """Day-over-day change rounded half up; 0 when there is no baseline."""
    today, yesterday = _amount(today), _amount(yesterday)
    if yesterday <= 0:
        return 0
    ratio = (today - yesterday) / yesterday * 100
    return int((ratio + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def format_change(change: int) -> str:
    if change > 0:
        return f"+{change}%"
    return f"{change}%"


def weekly_series(bookings: Iterable, end_day: date, days: int = 7) -> List[DailyPoint]:
    """Live booking revenue and occupancy for the ``days`` days ending on ``end_day``."""
    bookings = list(bookings)
    series = []
    for offset in range(days - 1, -1, -1):
        day = end_day - timedelta(days=offset)
        series.append(
            DailyPoint(
                date=day,
                revenue=live_booking_revenue(bookings, day),
                bookings=occupancy(bookings, day),
            )
        )
    return series


def low_stock(products: Iterable) -> List[LowStockItem]:
    return [
        LowStockItem(id=p.id, name=p.name, stock=p.stock, min_stock_alert=p.min_stock_alert)
        for p in products
        if p.stock <= p.min_stock_alert
    ]


def ledger_income(entries: Iterable) -> Decimal:
    """All-time sale and booking income still held in the ledger."""
    return sum(
        (_amount(entry.amount) for entry in entries if _is_type(entry, INCOME_TYPES)),
        ZERO,
    )


def global_totals(entries: Iterable, expenses: Iterable, summaries: Iterable) -> FinancialTotals:
    """Current ledger and expense sums plus compacted monthly history."""
    summaries = list(summaries)
    current_income = ledger_income(entries)
    historical_income = sum((_amount(s.total_income) for s in summaries), ZERO)
    current_expenses = sum((_amount(e.amount) for e in expenses), ZERO)
    # Expenses are never compacted, so this stays 0
    historical_expenses = sum((_amount(s.total_expenses) for s in summaries), ZERO)

    total_income = current_income + historical_income
    total_expenses = current_expenses + historical_expenses
    return FinancialTotals(
        current_income=current_income,
        historical_income=historical_income,
        total_income=total_income,
        current_expenses=current_expenses,
        historical_expenses=historical_expenses,
        total_expenses=total_expenses,
        net_income=total_income - total_expenses,
    )


def cashbox_figures(entries: Iterable, day) -> Dict[str, object]:
    entries = list(entries)
    buckets = method_buckets(entries, day)
    return {
        "date": day_key(day),
        "income_by_method": buckets,
        "method_total": sum((b.amount for b in buckets), ZERO),
        "ledger_revenue": ledger_revenue(entries, day),
        "operation_count": operation_count(entries, day),
    }


def dashboard_figures(
    bookings: Iterable,
    entries: Iterable,
    products: Iterable,
    today: date,
) -> Dict[str, object]:
    """Everything the operator dashboard renders, from in-memory collections."""
    bookings, entries = list(bookings), list(entries)
    today_revenue = live_booking_revenue(bookings, today)
    yesterday_revenue = live_booking_revenue(bookings, today - timedelta(days=1))
    change = percentage_change(today_revenue, yesterday_revenue)
    return {
        "date": today,
        "today_revenue": today_revenue,
        "yesterday_revenue": yesterday_revenue,
        "revenue_change": change,
        "revenue_change_label": format_change(change),
        "active_bookings": active_bookings(bookings),
        "today_bookings": occupancy(bookings, today),
        "ledger_revenue_today": ledger_revenue(entries, today),
        "income_by_method": method_buckets(entries, today),
        "operation_count_today": operation_count(entries, today),
        "weekly": weekly_series(bookings, today),
        "low_stock": low_stock(products),
    }
