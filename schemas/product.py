from app import ma
from models.product import Product
from schemas.base import Money
from marshmallow import fields, validate, EXCLUDE

class ProductSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Product
        load_instance = True
        unknown = EXCLUDE
        dump_only = ('id', 'created_at', 'updated_at')
    
    name = fields.String(required=True, validate=validate.Length(min=1, max=120))
    price = Money(validate=validate.Range(min=0))
    stock = fields.Integer(validate=validate.Range(min=0))
    min_stock = fields.Integer(validate=validate.Range(min=0))
    is_low_stock = fields.Boolean(dump_only=True)

class ProductListSchema(ma.Schema):
    id = fields.Integer()
    name = fields.String()
    price = Money()
    stock = fields.Integer()
    min_stock = fields.Integer()
    is_low_stock = fields.Boolean()
