import pytest
from datetime import date
from decimal import Decimal
from models.invoice import Invoice, InvoiceStatus, to_money

def test_to_money():
    assert to_money(0.1) + to_money(0.2) == Decimal('0.30')
    assert to_money('19.999') == Decimal('20.00')
    assert to_money(None) == Decimal('0.00')

def test_balance_is_exact():
    invoice = Invoice(total=Decimal('0.30'), amount_paid=Decimal('0.10'))
    assert invoice.balance == Decimal('0.20')

@pytest.mark.parametrize('status, paid, expected', [
    (InvoiceStatus.PENDING, 0, InvoiceStatus.PENDING),
    (InvoiceStatus.PENDING, 40, InvoiceStatus.PARTIAL),
    (InvoiceStatus.PARTIAL, 100, InvoiceStatus.PAID),
    (InvoiceStatus.PAID, 40, InvoiceStatus.PARTIAL),
    (InvoiceStatus.PAID, 0, InvoiceStatus.PENDING),
    (InvoiceStatus.OVERDUE, 40, InvoiceStatus.OVERDUE),
    (InvoiceStatus.OVERDUE, 100, InvoiceStatus.PAID),
    (InvoiceStatus.CANCELLED, 100, InvoiceStatus.CANCELLED),
])
def test_refresh_status(status, paid, expected):
    invoice = Invoice(total=Decimal('100.00'), amount_paid=Decimal(paid), status=status)
    invoice.refresh_status()
    assert invoice.status == expected

def test_apply_payment():
    invoice = Invoice(total=Decimal('0.30'), amount_paid=Decimal('0.00'), status=InvoiceStatus.PENDING)

    invoice.apply_payment(Decimal('0.10'))
    assert invoice.status == InvoiceStatus.PARTIAL

    invoice.apply_payment(Decimal('0.20'))
    assert invoice.amount_paid == Decimal('0.30')
    assert invoice.status == InvoiceStatus.PAID

def test_due_before_date():
    invoice = Invoice(date=date(2024, 5, 10), due_date=date(2024, 5, 1))
    assert invoice.due_before_date

    invoice.due_date = date(2024, 5, 10)
    assert not invoice.due_before_date

    assert not Invoice(date=date(2024, 5, 10)).due_before_date
