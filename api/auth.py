from flask import request, jsonify
from flask_restx import Namespace, Resource, fields
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    jwt_required,
    get_jwt_identity,
    get_jwt,
)
from marshmallow import ValidationError
from models.user import User
from schemas.user import UserSchema
from app import db, jwt
import logging

api = Namespace("auth", description="Authentication operations")

# Swagger models
login_model = api.model(
    "Login",
    {
        "username": fields.String(required=True, description="Username"),
        "password": fields.String(required=True, description="Password"),
    },
)

register_model = api.model(
    "Register",
    {
        "username": fields.String(required=True, description="Username"),
        "email": fields.String(required=True, description="Email"),
        "password": fields.String(required=True, description="Password"),
        "role": fields.String(required=False, description="Role (admin or user)"),
    },
)

token_model = api.model(
    "Token",
    {
        "access_token": fields.String(description="JWT access token"),
        "refresh_token": fields.String(description="JWT refresh token"),
        "user": fields.Raw(description="User data"),
    },
)

user_schema = UserSchema()

# Revoked access-token JTIs, cleared on restart
revoked_tokens: set[str] = set()


@jwt.token_in_blocklist_loader
def check_if_token_revoked(jwt_header, jwt_payload):
    """Reject access tokens revoked by logout."""
    return jwt_payload["jti"] in revoked_tokens


@jwt.user_lookup_loader
def load_current_user(jwt_header, jwt_payload):
    """Resolve ``current_user`` from the token identity."""
    return db.session.get(User, int(jwt_payload["sub"]))


def _unauthorized(*args):
    return jsonify({"error": "Unauthorized"}), 401


# Every flavour of bad session answers with the same 401 body
jwt.unauthorized_loader(_unauthorized)
jwt.invalid_token_loader(_unauthorized)
jwt.expired_token_loader(_unauthorized)
jwt.revoked_token_loader(_unauthorized)
jwt.user_lookup_error_loader(_unauthorized)


def _access_token(user):
    # String identity; load_current_user maps it back to the row
    return create_access_token(identity=str(user.id), additional_claims={"role": user.role})


@api.route("/login")
class Login(Resource):
    @api.expect(login_model)
    @api.response(200, "Login successful", token_model)
    @api.response(401, "Invalid credentials")
    def post(self):
        """Exchange a username and password for access and refresh tokens."""
        data = request.get_json(silent=True) or {}
        user = User.query.filter_by(username=data.get("username")).first()

        if not user or not user.check_password(data.get("password")):
            return {"error": "Invalid credentials"}, 401

        return {
            "access_token": _access_token(user),
            "refresh_token": create_refresh_token(identity=str(user.id)),
            "user": user_schema.dump(user),
        }, 200


@api.route("/refresh")
class TokenRefresh(Resource):
    @jwt_required(refresh=True)
    @api.response(200, "Token refreshed successfully")
    @api.response(401, "Invalid token")
    def post(self):
        """Issue a new access token using a valid refresh token."""
        user = db.session.get(User, int(get_jwt_identity()))
        if not user:
            return {"error": "User not found"}, 404

        return {"access_token": _access_token(user)}, 200


@api.route("/logout")
class Logout(Resource):
    @jwt_required()
    @api.response(200, "Logout successful")
    def post(self):
        """Revoke the access token used for this request."""
        jti = get_jwt()["jti"]
        revoked_tokens.add(jti)
        return {"message": "Logout successful"}, 200


@api.route("/register")
class Register(Resource):
    @api.expect(register_model)
    @api.response(201, "User registered successfully")
    @api.response(400, "Validation error")
    def post(self):
        """Create a new user account."""
        try:
            user_data = request.get_json(silent=True) or {}
            new_user = user_schema.load(user_data)

            db.session.add(new_user)
            db.session.commit()

            return user_schema.dump(new_user), 201

        except ValidationError as e:
            return {"error": "Validation error", "messages": e.messages}, 400
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error creating user: {e}")
            return {"error": "Failed to register user"}, 500
