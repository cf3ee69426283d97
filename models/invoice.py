import datetime
import enum
from decimal import Decimal
from app import db

class InvoiceStatus(enum.Enum):
    PENDING = 'PENDING'
    PARTIAL = 'PARTIAL'
    PAID = 'PAID'
    OVERDUE = 'OVERDUE'
    CANCELLED = 'CANCELLED'

# Statuses counted as outstanding on the dashboard
OPEN_STATUSES = (InvoiceStatus.PENDING, InvoiceStatus.OVERDUE)

# Statuses that only follow from recorded payments
DERIVED_STATUSES = (InvoiceStatus.PARTIAL, InvoiceStatus.PAID)

CENT = Decimal('0.01')

def to_money(value):
    """Coerce a stored or submitted amount to a two-place Decimal."""
    return Decimal(str(value or 0)).quantize(CENT)

class Invoice(db.Model):
    __tablename__ = 'invoices'
    
    id = db.Column(db.Integer, primary_key=True)
    client_id = db.Column(db.Integer, db.ForeignKey('clients.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, default=datetime.date.today)
    due_date = db.Column(db.Date)
    total = db.Column(db.Numeric(12, 2), nullable=False)
    amount_paid = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    status = db.Column(db.Enum(InvoiceStatus), nullable=False, default=InvoiceStatus.PENDING)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.datetime.utcnow,
                          onupdate=datetime.datetime.utcnow)
    
    # Relationships
    client = db.relationship('Client', back_populates='invoices')
    payments = db.relationship('Payment', back_populates='invoice', cascade='all, delete-orphan',
                               order_by=lambda: [Payment.date, Payment.id])
    
    @property
    def balance(self):
        return to_money(self.total) - to_money(self.amount_paid)

    @property
    def due_before_date(self):
        invoice_date = self.date or datetime.date.today()
        return self.due_date is not None and self.due_date < invoice_date

    def apply_payment(self, amount=0):
        """Add a payment amount and re-derive the status from the remaining balance."""
        self.amount_paid = to_money(self.amount_paid) + to_money(amount)
        self.refresh_status()

    def refresh_status(self):
        """
        Derive PENDING, PARTIAL or PAID from the amounts.

        CANCELLED is never changed here, and OVERDUE is kept until the
        invoice is settled.
        """
        if self.status == InvoiceStatus.CANCELLED:
            return

        paid = to_money(self.amount_paid)
        if paid > 0 and self.balance <= 0:
            self.status = InvoiceStatus.PAID
        elif self.status == InvoiceStatus.OVERDUE:
            return
        elif paid > 0:
            self.status = InvoiceStatus.PARTIAL
        else:
            self.status = InvoiceStatus.PENDING
    
    def __repr__(self):
        return f'<Invoice {self.id} - {self.total} - {self.status.value}>'

class Payment(db.Model):
    __tablename__ = 'payments'
    
    id = db.Column(db.Integer, primary_key=True)
    invoice_id = db.Column(db.Integer, db.ForeignKey('invoices.id', ondelete='CASCADE'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    date = db.Column(db.Date, nullable=False, default=datetime.date.today)
    payment_mode = db.Column(db.String(50), nullable=False, default='Cash')
    reference = db.Column(db.String(100))
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.datetime.utcnow)
    
    # Relationships
    invoice = db.relationship('Invoice', back_populates='payments')
    
    def __repr__(self):
        return f'<Payment {self.id} - {self.amount} - Invoice {self.invoice_id}>'
