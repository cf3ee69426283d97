"""
Date windows and trend arithmetic behind the dashboard endpoint.

Everything here is pure: callers pass ``today`` and the records fetched
from the database, which keeps the numbers easy to check in tests.
"""
from datetime import date
from dateutil.relativedelta import relativedelta
from models.invoice import OPEN_STATUSES

PERIODS = ('today', '7days', '30days', 'all')

# First day covered by the "all" period
EPOCH = date(1970, 1, 1)

_PERIOD_DAYS = {
    '7days': 7,
    '30days': 30,
}


def period_window(period, today):
    """
    Return the inclusive ``(start, end)`` dates covered by *period*.

    Raises:
        ValueError: if *period* is not one of :data:`PERIODS`.
    """
    if period == 'today':
        return today, today
    if period in _PERIOD_DAYS:
        return today - relativedelta(days=_PERIOD_DAYS[period]), today
    if period == 'all':
        return EPOCH, today
    raise ValueError(f"Invalid period '{period}'. Use one of: {', '.join(PERIODS)}")


def previous_window(period, start, end):
    """Shift a window back by the period length (one day for today/all)."""
    shift = relativedelta(days=_PERIOD_DAYS.get(period, 1))
    return start - shift, end - shift


def percent_change(current, previous, absolute=False):
    """
    Percentage change from *previous* to *current*.

    A zero baseline yields 100. With ``absolute=True`` the change is divided
    by ``|previous|`` so a move from a loss towards profit reads as growth.
    """
    if previous == 0:
        return 100.0
    baseline = abs(previous) if absolute else previous
    return (current - previous) / baseline * 100


def _sum(records, getter):
    return sum(float(getter(record) or 0) for record in records)


def summarize(invoices, expenses, previous_invoices, previous_expenses):
    """Totals and trends for the current window compared with the previous one."""
    total_sales = _sum(invoices, lambda i: i.total)
    previous_sales = _sum(previous_invoices, lambda i: i.total)

    total_credit = _sum(invoices, lambda i: float(i.total or 0) - float(i.amount_paid or 0))
    previous_credit = _sum(previous_invoices, lambda i: float(i.total or 0) - float(i.amount_paid or 0))

    total_expenses = _sum(expenses, lambda e: e.amount)
    previous_expenses_total = _sum(previous_expenses, lambda e: e.amount)

    profit_loss = total_sales - total_expenses
    previous_profit_loss = previous_sales - previous_expenses_total

    return {
        'total_sales': total_sales,
        'total_credit': total_credit,
        'total_expenses': total_expenses,
        'profit_loss': profit_loss,
        'pending_invoices': sum(1 for i in invoices if i.status in OPEN_STATUSES),
        'sales_trend': percent_change(total_sales, previous_sales),
        'credit_trend': percent_change(total_credit, previous_credit),
        'expense_trend': percent_change(total_expenses, previous_expenses_total),
        'profit_loss_trend': percent_change(profit_loss, previous_profit_loss, absolute=True),
    }
