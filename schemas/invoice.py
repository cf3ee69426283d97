from app import ma
from models.invoice import Invoice, Payment, InvoiceStatus, DERIVED_STATUSES
from models.expense import PAYMENT_MODES
from schemas.base import BlankToNoneMixin, Money
from schemas.client import ClientListSchema
from marshmallow import fields, validate, validates, validates_schema, ValidationError, EXCLUDE
from marshmallow_enum import EnumField

class PaymentSchema(BlankToNoneMixin, ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Payment
        load_instance = True
        unknown = EXCLUDE
        dump_only = ('id', 'created_at')
    
    invoice_id = fields.Integer(dump_only=True)
    amount = Money(required=True, validate=validate.Range(min=0, min_inclusive=False,
                                                          error='Amount must be greater than zero'))
    date = fields.Date()
    payment_mode = fields.String(validate=validate.OneOf(PAYMENT_MODES))
    reference = fields.String(allow_none=True, validate=validate.Length(max=100))

class InvoiceSchema(BlankToNoneMixin, ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Invoice
        load_instance = True
        unknown = EXCLUDE
        dump_only = ('id', 'created_at', 'updated_at')
    
    status = EnumField(InvoiceStatus, by_value=True)
    
    # Provide validation for fields
    client_id = fields.Integer(required=True)
    date = fields.Date()
    due_date = fields.Date(allow_none=True)
    total = Money(required=True, validate=validate.Range(min=0, min_inclusive=False,
                                                         error='Total must be greater than zero'))
    amount_paid = Money(dump_only=True)
    balance = Money(dump_only=True)
    notes = fields.String(allow_none=True)
    
    client = fields.Nested(ClientListSchema, dump_only=True)
    payments = fields.Nested(PaymentSchema, many=True, dump_only=True)
    
    @validates('status')
    def validate_status(self, value, **kwargs):
        if value in DERIVED_STATUSES:
            raise ValidationError('PARTIAL and PAID are set by recording payments')
    
    @validates_schema
    def validate_dates(self, data, **kwargs):
        if data.get('date') and data.get('due_date') and data['due_date'] < data['date']:
            raise ValidationError('Due date cannot be before the invoice date', 'due_date')

class InvoiceListSchema(ma.Schema):
    id = fields.Integer()
    client_id = fields.Integer()
    client = fields.Nested(ClientListSchema)
    date = fields.Date()
    due_date = fields.Date(allow_none=True)
    total = Money()
    amount_paid = Money()
    balance = Money()
    status = EnumField(InvoiceStatus, by_value=True)
