from app import ma
from models.client import Client
from marshmallow import fields, validate, EXCLUDE
from schemas.base import BlankToNoneMixin

class ClientSchema(BlankToNoneMixin, ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Client
        load_instance = True
        unknown = EXCLUDE
        dump_only = ('id', 'created_at', 'updated_at')
    
    # Provide validation for fields
    name = fields.String(required=True, validate=validate.Length(min=1, max=120))
    email = fields.Email(allow_none=True)
    phone = fields.String(required=True, validate=validate.Length(min=1, max=50))
    address = fields.String(allow_none=True, validate=validate.Length(max=200))

class ClientListSchema(ma.Schema):
    id = fields.Integer()
    name = fields.String()
    email = fields.String(allow_none=True)
    phone = fields.String()
    address = fields.String(allow_none=True)
    created_at = fields.DateTime()
