from app import ma
from models.expense import Expense, EXPENSE_CATEGORIES, PAYMENT_MODES
from schemas.base import BlankToNoneMixin, Money
from marshmallow import fields, validate, EXCLUDE

class ExpenseSchema(BlankToNoneMixin, ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Expense
        load_instance = True
        unknown = EXCLUDE
        dump_only = ('id', 'created_at', 'updated_at')
    
    # Provide validation for fields
    date = fields.Date()
    amount = Money(required=True, validate=validate.Range(min=0, min_inclusive=False,
                                                          error='Amount must be greater than zero'))
    category = fields.String(required=True, validate=validate.OneOf(EXPENSE_CATEGORIES))
    description = fields.String(allow_none=True)
    payment_mode = fields.String(validate=validate.OneOf(PAYMENT_MODES))
    reference = fields.String(allow_none=True, validate=validate.Length(max=100))

class ExpenseListSchema(ma.Schema):
    id = fields.Integer()
    date = fields.Date()
    amount = Money()
    category = fields.String()
    description = fields.String(allow_none=True)
    payment_mode = fields.String()
    reference = fields.String(allow_none=True)
