from flask import request
from flask_restx import Namespace, Resource, fields, reqparse
from flask_jwt_extended import jwt_required, current_user
from datetime import datetime
from marshmallow import ValidationError
from sqlalchemy.orm import joinedload
from models.client import Client
from models.invoice import Invoice, InvoiceStatus, to_money
from schemas.invoice import InvoiceSchema, InvoiceListSchema, PaymentSchema
from app import db
from utils.pagination import paginate
import logging

# Setting up API namespace
api = Namespace('invoices', description='Invoice and payment operations')

STATUS_VALUES = [status.value for status in InvoiceStatus]

# Define models for swagger
invoice_model = api.model('Invoice', {
    'client_id': fields.Integer(required=True, description='Client ID'),
    'date': fields.Date(description='Invoice date, defaults to today'),
    'due_date': fields.Date(description='Due date'),
    'total': fields.Float(required=True, description='Invoice total'),
    'status': fields.String(description='Invoice status', enum=STATUS_VALUES),
    'notes': fields.String(description='Additional notes')
})

payment_model = api.model('Payment', {
    'amount': fields.Float(required=True, description='Amount received'),
    'date': fields.Date(description='Payment date, defaults to today'),
    'payment_mode': fields.String(description='Payment mode, defaults to Cash'),
    'reference': fields.String(description='Transaction reference')
})

# Set up schemas
invoice_schema = InvoiceSchema()
invoice_list_schema = InvoiceListSchema(many=True)
payment_schema = PaymentSchema()
payments_schema = PaymentSchema(many=True)

# Query parameter parser
invoice_parser = reqparse.RequestParser()
invoice_parser.add_argument('status', type=str, help='Filter by status')
invoice_parser.add_argument('client_id', type=int, help='Filter by client ID')
invoice_parser.add_argument('date_from', type=str, help='Filter by date from (YYYY-MM-DD)')
invoice_parser.add_argument('date_to', type=str, help='Filter by date to (YYYY-MM-DD)')
invoice_parser.add_argument('page', type=int, default=1, help='Page number')
invoice_parser.add_argument('limit', type=int, default=10, help='Items per page')


def get_user_invoice(invoice_id):
    """Fetch an invoice owned by the current user or abort with 404."""
    return Invoice.query.filter_by(id=invoice_id, user_id=current_user.id).first_or_404()


def user_owns_client(client_id):
    return Client.query.filter_by(id=client_id, user_id=current_user.id).first() is not None


@api.route('')
class InvoiceList(Resource):
    @jwt_required()
    @api.expect(invoice_parser)
    @api.response(200, 'Success')
    @api.response(400, 'Invalid filter')
    def get(self):
        """List the current user's invoices with optional filtering and pagination"""
        args = invoice_parser.parse_args()

        query = Invoice.query.options(joinedload(Invoice.client)).filter(Invoice.user_id == current_user.id)

        # Apply filters
        if args.get('status'):
            if args['status'] not in STATUS_VALUES:
                return {'error': f"Invalid status. Use one of: {', '.join(STATUS_VALUES)}"}, 400
            query = query.filter(Invoice.status == InvoiceStatus(args['status']))

        if args.get('client_id'):
            query = query.filter(Invoice.client_id == args['client_id'])

        if args.get('date_from'):
            try:
                date_from = datetime.strptime(args['date_from'], '%Y-%m-%d').date()
                query = query.filter(Invoice.date >= date_from)
            except ValueError:
                return {'error': 'Invalid date_from format. Use YYYY-MM-DD'}, 400

        if args.get('date_to'):
            try:
                date_to = datetime.strptime(args['date_to'], '%Y-%m-%d').date()
                query = query.filter(Invoice.date <= date_to)
            except ValueError:
                return {'error': 'Invalid date_to format. Use YYYY-MM-DD'}, 400

        try:
            query = query.order_by(Invoice.date.desc(), Invoice.id.desc())
            return paginate(query, args.get('page'), args.get('limit'), invoice_list_schema, key='invoices'), 200
        except Exception as e:
            logging.error(f"Error fetching invoices: {str(e)}")
            return {'error': 'Failed to fetch invoices'}, 500

    @jwt_required()
    @api.expect(invoice_model)
    @api.response(201, 'Invoice created successfully')
    @api.response(400, 'Validation error')
    @api.response(404, 'Client not found')
    def post(self):
        """Create a new invoice"""
        try:
            invoice_data = request.get_json(silent=True) or {}

            # Validate and deserialize input
            invoice = invoice_schema.load(invoice_data)
            if invoice.due_before_date:
                raise ValidationError('Due date cannot be before the invoice date', 'due_date')

            if not user_owns_client(invoice.client_id):
                db.session.rollback()
                return {'error': f'Client with ID {invoice.client_id} not found'}, 404

            invoice.user_id = current_user.id
            db.session.add(invoice)
            db.session.commit()

            return {'data': invoice_schema.dump(invoice)}, 201

        except ValidationError as e:
            db.session.rollback()
            return {'error': 'Validation error', 'messages': e.messages}, 400
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error creating invoice: {str(e)}")
            return {'error': 'Failed to create invoice'}, 500

@api.route('/<int:id>')
class InvoiceDetail(Resource):
    @jwt_required()
    @api.response(200, 'Success')
    @api.response(404, 'Invoice not found')
    def get(self, id):
        """Get an invoice with its client and payments"""
        invoice = get_user_invoice(id)
        return {'data': invoice_schema.dump(invoice)}, 200

    @jwt_required()
    @api.expect(invoice_model)
    @api.response(200, 'Invoice updated successfully')
    @api.response(404, 'Invoice or client not found')
    @api.response(400, 'Validation error')
    def put(self, id):
        """Update an invoice; amount_paid only changes through payments"""
        invoice = get_user_invoice(id)

        try:
            invoice_data = request.get_json(silent=True) or {}

            if 'client_id' in invoice_data and not user_owns_client(invoice_data['client_id']):
                return {'error': f"Client with ID {invoice_data['client_id']} not found"}, 404

            invoice = invoice_schema.load(invoice_data, instance=invoice, partial=True)

            # Validate the merged record, not just the payload
            if invoice.due_before_date:
                raise ValidationError('Due date cannot be before the invoice date', 'due_date')
            if invoice.balance < 0:
                raise ValidationError(
                    f'Total cannot be less than the amount already paid ({to_money(invoice.amount_paid):.2f})',
                    'total')

            invoice.refresh_status()
            db.session.commit()

            return {'data': invoice_schema.dump(invoice)}, 200

        except ValidationError as e:
            db.session.rollback()
            return {'error': 'Validation error', 'messages': e.messages}, 400
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error updating invoice: {str(e)}")
            return {'error': 'Failed to update invoice'}, 500

@api.route('/<int:id>/payments')
class InvoicePayments(Resource):
    @jwt_required()
    @api.response(200, 'Success')
    @api.response(404, 'Invoice not found')
    def get(self, id):
        """List the payments recorded against an invoice"""
        invoice = get_user_invoice(id)
        return {'data': payments_schema.dump(invoice.payments)}, 200

    @jwt_required()
    @api.expect(payment_model)
    @api.response(201, 'Payment recorded')
    @api.response(400, 'Validation error or amount exceeds balance')
    @api.response(404, 'Invoice not found')
    def post(self, id):
        """Record a payment and update the invoice balance and status"""
        invoice = get_user_invoice(id)

        if invoice.status == InvoiceStatus.CANCELLED:
            return {'error': 'Cannot record a payment on a cancelled invoice'}, 400

        try:
            payment_data = request.get_json(silent=True) or {}
            payment = payment_schema.load(payment_data)

            if payment.amount > invoice.balance:
                db.session.rollback()
                return {'error': f'Payment exceeds outstanding balance of {invoice.balance:.2f}'}, 400

            payment.user_id = current_user.id
            invoice.payments.append(payment)
            invoice.apply_payment(payment.amount)

            db.session.commit()

            return {
                'data': payment_schema.dump(payment),
                'invoice': invoice_schema.dump(invoice)
            }, 201

        except ValidationError as e:
            db.session.rollback()
            return {'error': 'Validation error', 'messages': e.messages}, 400
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error recording payment: {str(e)}")
            return {'error': 'Failed to record payment'}, 500
