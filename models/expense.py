import datetime
from app import db

EXPENSE_CATEGORIES = [
    'Rent',
    'Utilities',
    'Salaries',
    'Supplies',
    'Marketing',
    'Travel',
    'Maintenance',
    'Insurance',
    'Others',
]

PAYMENT_MODES = ['Cash', 'Bank Transfer', 'UPI', 'Credit Card', 'Other']

DEFAULT_PAYMENT_MODE = 'Cash'

class Expense(db.Model):
    __tablename__ = 'expenses'
    
    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, nullable=False, default=datetime.date.today)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    category = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)
    payment_mode = db.Column(db.String(50), nullable=False, default=DEFAULT_PAYMENT_MODE)
    reference = db.Column(db.String(100))
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.datetime.utcnow,
                          onupdate=datetime.datetime.utcnow)
    
    def __repr__(self):
        return f'<Expense {self.id} - {self.amount} - {self.category}>'
