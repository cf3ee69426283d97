from flask import current_app
from flask_restx import Namespace, Resource, reqparse
from flask_jwt_extended import jwt_required, current_user
from datetime import date
from sqlalchemy.orm import selectinload
from models.invoice import Invoice
from models.expense import Expense
from models.product import Product
from schemas.invoice import InvoiceSchema
from schemas.expense import ExpenseListSchema
from schemas.product import ProductListSchema
from utils.dashboard import PERIODS, period_window, previous_window, summarize
import logging

# Setting up API namespace
api = Namespace('dashboard', description='Sales, credit and expense summary')

# Define parameter parsers
dashboard_parser = reqparse.RequestParser()
dashboard_parser.add_argument('period', type=str, default='today', help=f"Time window ({', '.join(PERIODS)})")

# Set up schemas
recent_invoices_schema = InvoiceSchema(many=True)
recent_expenses_schema = ExpenseListSchema(many=True)
low_stock_schema = ProductListSchema(many=True)


def invoices_between(start, end, with_details=False):
    query = Invoice.query.filter(
        Invoice.user_id == current_user.id,
        Invoice.date >= start,
        Invoice.date <= end
    )
    if with_details:
        query = query.options(selectinload(Invoice.client), selectinload(Invoice.payments))
    return query.order_by(Invoice.date.desc(), Invoice.id.desc()).all()


def expenses_between(start, end):
    return Expense.query.filter(
        Expense.user_id == current_user.id,
        Expense.date >= start,
        Expense.date <= end
    ).order_by(Expense.date.desc(), Expense.id.desc()).all()


@api.route('')
class Dashboard(Resource):
    @jwt_required()
    @api.expect(dashboard_parser)
    @api.response(200, 'Success')
    @api.response(400, 'Invalid period')
    def get(self):
        """Totals and trends for the selected period compared with the one before it"""
        args = dashboard_parser.parse_args()
        period = args.get('period') or 'today'

        try:
            start_date, end_date = period_window(period, date.today())
        except ValueError as e:
            return {'error': str(e)}, 400

        try:
            previous_start, previous_end = previous_window(period, start_date, end_date)

            invoices = invoices_between(start_date, end_date, with_details=True)
            expenses = expenses_between(start_date, end_date)
            previous_invoices = invoices_between(previous_start, previous_end)
            previous_expenses = expenses_between(previous_start, previous_end)

            low_stock_products = Product.query.filter(
                Product.user_id == current_user.id,
                Product.stock <= Product.min_stock
            ).order_by(Product.name).all()

            summary = summarize(invoices, expenses, previous_invoices, previous_expenses)
            limit = current_app.config.get('DASHBOARD_RECENT_LIMIT', 10)

            return {
                'period': period,
                'start_date': start_date.isoformat(),
                'end_date': end_date.isoformat(),
                **summary,
                'total_products': len(low_stock_products),
                'low_stock_products': low_stock_schema.dump(low_stock_products),
                'recent_invoices': recent_invoices_schema.dump(invoices[:limit]),
                'recent_expenses': recent_expenses_schema.dump(expenses[:limit]),
            }, 200

        except Exception as e:
            logging.error(f"Dashboard error: {str(e)}")
            return {'error': 'Failed to fetch dashboard data'}, 500
