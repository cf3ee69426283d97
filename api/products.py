from flask import request
from flask_restx import Namespace, Resource, fields, reqparse, inputs
from flask_jwt_extended import jwt_required, current_user
from marshmallow import ValidationError
from models.product import Product
from schemas.product import ProductSchema, ProductListSchema
from app import db
from utils.pagination import paginate
import logging

# Setting up API namespace
api = Namespace('products', description='Product stock operations')

# Define models for swagger
product_model = api.model('Product', {
    'name': fields.String(required=True, description='Product name'),
    'price': fields.Float(description='Unit price'),
    'stock': fields.Integer(description='Units in stock'),
    'min_stock': fields.Integer(description='Reorder threshold')
})

# Set up schemas
product_schema = ProductSchema()
product_list_schema = ProductListSchema(many=True)

# Query parameter parser
product_parser = reqparse.RequestParser()
product_parser.add_argument('search', type=str, help='Search by name')
product_parser.add_argument('low_stock', type=inputs.boolean, default=False, help='Only products at or below minimum stock')
product_parser.add_argument('page', type=int, default=1, help='Page number')
product_parser.add_argument('limit', type=int, default=10, help='Items per page')


def get_user_product(product_id):
    return Product.query.filter_by(id=product_id, user_id=current_user.id).first_or_404()


@api.route('')
class ProductList(Resource):
    @jwt_required()
    @api.expect(product_parser)
    @api.response(200, 'Success')
    def get(self):
        """List the current user's products"""
        args = product_parser.parse_args()

        try:
            query = Product.query.filter(Product.user_id == current_user.id)

            search = (args.get('search') or '').strip()
            if search:
                query = query.filter(Product.name.ilike(f"%{search}%"))

            if args.get('low_stock'):
                query = query.filter(Product.stock <= Product.min_stock)

            query = query.order_by(Product.name)

            return paginate(query, args.get('page'), args.get('limit'), product_list_schema, key='products'), 200

        except Exception as e:
            logging.error(f"Error fetching products: {str(e)}")
            return {'error': 'Failed to fetch products'}, 500

    @jwt_required()
    @api.expect(product_model)
    @api.response(201, 'Product created successfully')
    @api.response(400, 'Validation error')
    def post(self):
        """Create a new product"""
        try:
            product = product_schema.load(request.get_json(silent=True) or {})
            product.user_id = current_user.id

            db.session.add(product)
            db.session.commit()

            return {'data': product_schema.dump(product)}, 201

        except ValidationError as e:
            db.session.rollback()
            return {'error': 'Validation error', 'messages': e.messages}, 400
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error creating product: {str(e)}")
            return {'error': 'Failed to create product'}, 500

@api.route('/<int:id>')
class ProductDetail(Resource):
    @jwt_required()
    @api.response(200, 'Success')
    @api.response(404, 'Product not found')
    def get(self, id):
        """Get a product by ID"""
        product = get_user_product(id)
        return {'data': product_schema.dump(product)}, 200

    @jwt_required()
    @api.expect(product_model)
    @api.response(200, 'Product updated successfully')
    @api.response(404, 'Product not found')
    @api.response(400, 'Validation error')
    def put(self, id):
        """Update a product"""
        product = get_user_product(id)

        try:
            product = product_schema.load(request.get_json(silent=True) or {}, instance=product, partial=True)
            db.session.commit()

            return {'data': product_schema.dump(product)}, 200

        except ValidationError as e:
            db.session.rollback()
            return {'error': 'Validation error', 'messages': e.messages}, 400
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error updating product: {str(e)}")
            return {'error': 'Failed to update product'}, 500
