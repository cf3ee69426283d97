import pytest
from datetime import date
from types import SimpleNamespace
from models.invoice import InvoiceStatus
from utils.dashboard import period_window, previous_window, percent_change, summarize

TODAY = date(2024, 3, 15)

@pytest.mark.parametrize('period, expected', [
    ('today', (date(2024, 3, 15), date(2024, 3, 15))),
    ('7days', (date(2024, 3, 8), date(2024, 3, 15))),
    ('30days', (date(2024, 2, 14), date(2024, 3, 15))),
    ('all', (date(1970, 1, 1), date(2024, 3, 15))),
])
def test_period_window(period, expected):
    assert period_window(period, TODAY) == expected

def test_period_window_rejects_unknown_period():
    with pytest.raises(ValueError):
        period_window('year', TODAY)

@pytest.mark.parametrize('period, expected', [
    ('today', (date(2024, 3, 14), date(2024, 3, 14))),
    ('7days', (date(2024, 3, 1), date(2024, 3, 8))),
    ('30days', (date(2024, 1, 15), date(2024, 2, 14))),
    ('all', (date(1969, 12, 31), date(2024, 3, 14))),
])
def test_previous_window(period, expected):
    start, end = period_window(period, TODAY)
    assert previous_window(period, start, end) == expected

def test_percent_change():
    assert percent_change(150, 100) == pytest.approx(50.0)
    assert percent_change(50, 100) == pytest.approx(-50.0)
    assert percent_change(0, 0) == 100.0
    assert percent_change(42, 0) == 100.0

def test_percent_change_against_a_loss():
    # From a loss of 200 to a profit of 100 is growth, not decline
    assert percent_change(100, -200, absolute=True) == pytest.approx(150.0)
    assert percent_change(100, -200) == pytest.approx(-150.0)

def _invoice(total, paid, status=InvoiceStatus.PENDING):
    return SimpleNamespace(total=total, amount_paid=paid, status=status)

def _expense(amount):
    return SimpleNamespace(amount=amount)

def test_summarize():
    invoices = [
        _invoice(1000, 1000, InvoiceStatus.PAID),
        _invoice(400, 100, InvoiceStatus.PARTIAL),
        _invoice(250, 0, InvoiceStatus.OVERDUE),
        _invoice(100, 0, InvoiceStatus.PENDING),
    ]
    previous_invoices = [_invoice(500, 0)]

    summary = summarize(invoices, [_expense(300), _expense(50)], previous_invoices, [_expense(700)])

    assert summary['total_sales'] == 1750
    assert summary['total_credit'] == 650
    assert summary['total_expenses'] == 350
    assert summary['profit_loss'] == 1400
    assert summary['pending_invoices'] == 2
    assert summary['sales_trend'] == pytest.approx(250.0)
    assert summary['credit_trend'] == pytest.approx(30.0)
    assert summary['expense_trend'] == pytest.approx(-50.0)
    # Previous profit/loss was -200
    assert summary['profit_loss_trend'] == pytest.approx(800.0)

def test_summarize_empty():
    summary = summarize([], [], [], [])

    assert summary['total_sales'] == 0
    assert summary['pending_invoices'] == 0
    assert summary['sales_trend'] == 100.0
    assert summary['profit_loss_trend'] == 100.0
