from flask import request
from flask_restx import Namespace, Resource, fields, reqparse
from flask_jwt_extended import jwt_required, current_user
from marshmallow import ValidationError
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from models.client import Client
from schemas.client import ClientSchema, ClientListSchema
from app import db
from utils.pagination import paginate
import logging

# Setting up API namespace
api = Namespace('clients', description='Client operations')

# Define models for swagger
client_model = api.model('Client', {
    'name': fields.String(required=True, description='Client name'),
    'email': fields.String(description='Client email'),
    'phone': fields.String(required=True, description='Client phone number, unique per user'),
    'address': fields.String(description='Client address'),
})

# Set up schemas
client_schema = ClientSchema()
client_list_schema = ClientListSchema(many=True)

# Query parameter parser
client_parser = reqparse.RequestParser()
client_parser.add_argument('page', type=int, default=1, help='Page number')
client_parser.add_argument('limit', type=int, default=10, help='Items per page')
client_parser.add_argument('search', type=str, default='', help='Search by name, phone or email')

# Fields refreshed when a client is posted again with a known phone
UPSERT_FIELDS = ('name', 'email', 'address')


def get_user_client(client_id):
    """Fetch a client owned by the current user or abort with 404."""
    return Client.query.filter_by(id=client_id, user_id=current_user.id).first_or_404()


@api.route('')
class ClientList(Resource):
    @jwt_required()
    @api.expect(client_parser)
    @api.response(200, 'Success')
    @api.response(401, 'Unauthorized')
    def get(self):
        """List the current user's clients, newest first"""
        args = client_parser.parse_args()

        try:
            query = Client.query.filter(Client.user_id == current_user.id)

            search = (args.get('search') or '').strip()
            if search:
                pattern = f"%{search}%"
                query = query.filter(or_(
                    Client.name.ilike(pattern),
                    Client.phone.ilike(pattern),
                    Client.email.ilike(pattern),
                ))

            query = query.order_by(Client.created_at.desc(), Client.id.desc())

            return paginate(query, args.get('page'), args.get('limit'), client_list_schema, key='clients'), 200

        except Exception as e:
            logging.error(f"Error fetching clients: {str(e)}")
            return {'error': 'Failed to fetch clients'}, 500

    @jwt_required()
    @api.expect(client_model)
    @api.response(201, 'Client created')
    @api.response(200, 'Existing client updated')
    @api.response(400, 'Validation error')
    def post(self):
        """Create a client, or update the one already registered with this phone"""
        try:
            client_data = request.get_json(silent=True) or {}

            # Validate before touching the database
            errors = client_schema.validate(client_data)
            if errors:
                return {'error': 'Validation error', 'messages': errors}, 400

            phone = client_data.get('phone')
            client = Client.query.filter_by(phone=phone, user_id=current_user.id).first()

            if client:
                changes = {key: client_data[key] for key in UPSERT_FIELDS if key in client_data}
                changes['phone'] = phone
                client = client_schema.load(changes, instance=client, partial=True)
                status = 200
            else:
                client = client_schema.load(client_data)
                client.user_id = current_user.id
                db.session.add(client)
                status = 201

            db.session.commit()

            return {'data': client_schema.dump(client)}, status

        except ValidationError as e:
            db.session.rollback()
            return {'error': 'Validation error', 'messages': e.messages}, 400
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error creating/updating client: {str(e)}")
            return {'error': 'Failed to create/update client'}, 500

@api.route('/<int:id>')
class ClientDetail(Resource):
    @jwt_required()
    @api.response(200, 'Success')
    @api.response(404, 'Client not found')
    def get(self, id):
        """Get a client by ID"""
        client = get_user_client(id)
        return {'data': client_schema.dump(client)}, 200

    @jwt_required()
    @api.expect(client_model)
    @api.response(200, 'Client updated successfully')
    @api.response(404, 'Client not found')
    @api.response(400, 'Validation error')
    def put(self, id):
        """Update a client"""
        client = get_user_client(id)

        try:
            client_data = request.get_json(silent=True) or {}
            client = client_schema.load(client_data, instance=client, partial=True)

            db.session.commit()

            return {'data': client_schema.dump(client)}, 200

        except ValidationError as e:
            db.session.rollback()
            return {'error': 'Validation error', 'messages': e.messages}, 400
        except IntegrityError:
            db.session.rollback()
            return {'error': 'A client with this phone already exists'}, 409
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error updating client: {str(e)}")
            return {'error': 'Failed to update client'}, 500

    @jwt_required()
    @api.response(200, 'Client deleted successfully')
    @api.response(404, 'Client not found')
    @api.response(409, 'Client has invoices and cannot be deleted')
    def delete(self, id):
        """Delete a client"""
        client = get_user_client(id)

        # Check if client has associated invoices
        if client.invoices:
            return {'error': 'Client has invoices and cannot be deleted'}, 409

        try:
            db.session.delete(client)
            db.session.commit()
            return {'message': 'Client deleted'}, 200
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error deleting client: {str(e)}")
            return {'error': 'Failed to delete client'}, 500
