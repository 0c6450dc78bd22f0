from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity

from fabtrack.errors import ValidationError
from fabtrack.serializers import serialize_user
from fabtrack.services.auth_service import AuthService
from fabtrack.utils.validation import optional_int, optional_str, require_int, require_object, require_str

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/signup")
def signup():
    data = require_object(request)

    email = require_str(data, "email")
    if "@" not in email:
        raise ValidationError('"email" must be a valid email')

    user = AuthService.sign_up(
        email=email,
        password=require_str(data, "password", min_len=6),
        name=require_str(data, "name"),
        role=require_str(data, "role"),
        major=require_str(data, "major"),
        year_group=require_int(data, "yearGroup"),
    )
    return jsonify({"success": True, "message": "User registered successfully", "userID": user.id}), 201


@auth_bp.post("/login")
def login():
    data = require_object(request)
    token, user = AuthService.login(require_str(data, "email"), require_str(data, "password"))
    return jsonify({
        "success": True,
        "message": "Login successful",
        "token": token,
        "user": serialize_user(user),
    })


@auth_bp.post("/logout")
@jwt_required()
def logout():
    # tokens are stateless; the client drops its copy
    return jsonify({"success": True, "message": "Logged out successfully"})


@auth_bp.get("/me")
@jwt_required()
def me():
    user = AuthService.get_user(int(get_jwt_identity()))
    return jsonify({"success": True, "user": serialize_user(user)})


@auth_bp.put("/edit")
@jwt_required()
def edit_user():
    data = require_object(request)
    name = optional_str(data, "name")
    major = optional_str(data, "major")
    year_group = optional_int(data, "yearGroup")
    if name is None and major is None and year_group is None:
        raise ValidationError("At least one of name, major, yearGroup is required")

    user = AuthService.edit_user(int(get_jwt_identity()), name=name, major=major, year_group=year_group)
    return jsonify({"success": True, "message": "User details updated successfully", "user": serialize_user(user)})
