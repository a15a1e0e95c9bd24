from flask import Blueprint, request, jsonify

from library_tracker.extensions import db
from library_tracker.services.user_service import UserService
from library_tracker.utils.validators import json_object

user_bp = Blueprint("users", __name__, url_prefix="/users")


@user_bp.get("")
def list_users():
    return jsonify([u.as_dict() for u in UserService(db.session).list_users()])


@user_bp.get("/<int:user_id>")
def get_user(user_id: int):
    return jsonify(UserService(db.session).get_user(user_id).as_dict())


@user_bp.post("")
def create_user():
    data = json_object(request.get_json(silent=True))
    user = UserService(db.session).create_user(data)
    return jsonify(user.as_dict()), 201


@user_bp.put("/<int:user_id>")
def update_user(user_id: int):
    data = json_object(request.get_json(silent=True))
    user = UserService(db.session).update_user(user_id, data)
    return jsonify(user.as_dict())


@user_bp.delete("/<int:user_id>")
def delete_user(user_id: int):
    UserService(db.session).delete_user(user_id)
    return jsonify({"message": "User deleted successfully"})


@user_bp.get("/<int:user_id>/current-borrows")
def current_borrows(user_id: int):
    rows = UserService(db.session).current_borrows(user_id)
    return jsonify([x.as_dict() for x in rows])
