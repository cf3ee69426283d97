from flask import request
from flask_restx import Namespace, Resource, fields, reqparse
from flask_jwt_extended import jwt_required, current_user
from datetime import datetime
from marshmallow import ValidationError
from models.expense import Expense, EXPENSE_CATEGORIES, PAYMENT_MODES, DEFAULT_PAYMENT_MODE
from schemas.expense import ExpenseSchema, ExpenseListSchema
from app import db
from utils.pagination import paginate
from sqlalchemy import func, or_
import logging

# Setting up API namespace
api = Namespace('expenses', description='Expense operations')

# Define models for swagger
expense_model = api.model('Expense', {
    'date': fields.Date(description='Expense date, defaults to today'),
    'amount': fields.Float(required=True, description='Expense amount'),
    'category': fields.String(required=True, description='Expense category', enum=EXPENSE_CATEGORIES),
    'description': fields.String(description='Expense description'),
    'payment_mode': fields.String(description='Payment mode', enum=PAYMENT_MODES, default=DEFAULT_PAYMENT_MODE),
    'reference': fields.String(description='Receipt or transaction reference')
})

# Set up schemas
expense_schema = ExpenseSchema()
expense_list_schema = ExpenseListSchema(many=True)

# Query parameter parser
expense_parser = reqparse.RequestParser()
expense_parser.add_argument('category', type=str, help='Filter by category')
expense_parser.add_argument('date_from', type=str, help='Filter by date from (YYYY-MM-DD)')
expense_parser.add_argument('date_to', type=str, help='Filter by date to (YYYY-MM-DD)')
expense_parser.add_argument('search', type=str, help='Search description or reference')
expense_parser.add_argument('page', type=int, default=1, help='Page number')
expense_parser.add_argument('limit', type=int, default=10, help='Items per page')


def get_user_expense(expense_id):
    """Fetch an expense owned by the current user or abort with 404."""
    return Expense.query.filter_by(id=expense_id, user_id=current_user.id).first_or_404()


@api.route('')
class ExpenseList(Resource):
    @jwt_required()
    @api.expect(expense_parser)
    @api.response(200, 'Success')
    @api.response(400, 'Invalid filter')
    def get(self):
        """Get the current user's expenses with optional filtering and pagination"""
        args = expense_parser.parse_args()

        # Base query
        query = Expense.query.filter(Expense.user_id == current_user.id)

        # Apply filters
        if args.get('category'):
            query = query.filter(Expense.category == args['category'])

        if args.get('date_from'):
            try:
                date_from = datetime.strptime(args['date_from'], '%Y-%m-%d').date()
                query = query.filter(Expense.date >= date_from)
            except ValueError:
                return {'error': 'Invalid date_from format. Use YYYY-MM-DD'}, 400

        if args.get('date_to'):
            try:
                date_to = datetime.strptime(args['date_to'], '%Y-%m-%d').date()
                query = query.filter(Expense.date <= date_to)
            except ValueError:
                return {'error': 'Invalid date_to format. Use YYYY-MM-DD'}, 400

        search = (args.get('search') or '').strip()
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Expense.description.ilike(pattern),
                Expense.reference.ilike(pattern),
            ))

        try:
            # Calculate total before pagination
            total = query.with_entities(func.coalesce(func.sum(Expense.amount), 0)).scalar()

            query = query.order_by(Expense.date.desc(), Expense.id.desc())
            result = paginate(query, args.get('page'), args.get('limit'), expense_list_schema, key='expenses')

            # Add total to result
            result['total'] = float(total or 0)

            return result, 200

        except Exception as e:
            logging.error(f"Error fetching expenses: {str(e)}")
            return {'error': 'Failed to fetch expenses'}, 500

    @jwt_required()
    @api.expect(expense_model)
    @api.response(201, 'Expense created successfully')
    @api.response(400, 'Validation error')
    def post(self):
        """Create a new expense"""
        try:
            expense_data = request.get_json(silent=True) or {}

            # Validate and deserialize input
            expense = expense_schema.load(expense_data)
            expense.user_id = current_user.id

            # Add to database
            db.session.add(expense)
            db.session.commit()

            return {'data': expense_schema.dump(expense)}, 201

        except ValidationError as e:
            db.session.rollback()
            return {'error': 'Validation error', 'messages': e.messages}, 400
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error creating expense: {str(e)}")
            return {'error': 'Failed to create expense'}, 500

@api.route('/options')
class ExpenseOptions(Resource):
    @jwt_required()
    @api.response(200, 'Success')
    def get(self):
        """Choices offered by the expense form"""
        return {
            'categories': EXPENSE_CATEGORIES,
            'payment_modes': PAYMENT_MODES,
            'default_payment_mode': DEFAULT_PAYMENT_MODE
        }, 200

@api.route('/<int:id>')
class ExpenseDetail(Resource):
    @jwt_required()
    @api.response(200, 'Success')
    @api.response(404, 'Expense not found')
    def get(self, id):
        """Get an expense by ID"""
        expense = get_user_expense(id)
        return {'data': expense_schema.dump(expense)}, 200

    @jwt_required()
    @api.expect(expense_model)
    @api.response(200, 'Expense updated successfully')
    @api.response(404, 'Expense not found')
    @api.response(400, 'Validation error')
    def put(self, id):
        """Update an expense"""
        expense = get_user_expense(id)

        try:
            expense_data = request.get_json(silent=True) or {}
            expense = expense_schema.load(expense_data, instance=expense, partial=True)

            db.session.commit()

            return {'data': expense_schema.dump(expense)}, 200

        except ValidationError as e:
            db.session.rollback()
            return {'error': 'Validation error', 'messages': e.messages}, 400
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error updating expense: {str(e)}")
            return {'error': 'Failed to update expense'}, 500

    @jwt_required()
    @api.response(200, 'Expense deleted successfully')
    @api.response(404, 'Expense not found')
    def delete(self, id):
        """Delete an expense"""
        expense = get_user_expense(id)

        try:
            db.session.delete(expense)
            db.session.commit()
            return {'message': 'Expense deleted'}, 200
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error deleting expense: {str(e)}")
            return {'error': 'Failed to delete expense'}, 500
