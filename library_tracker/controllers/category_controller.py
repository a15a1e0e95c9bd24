from flask import Blueprint, request, jsonify

from library_tracker.extensions import db
from library_tracker.services.category_service import CategoryService
from library_tracker.utils.validators import json_object

category_bp = Blueprint("categories", __name__, url_prefix="/categories")


@category_bp.get("")
def list_categories():
    categories = CategoryService(db.session).list_categories()
    return jsonify([c.as_dict() for c in categories])


@category_bp.get("/<int:category_id>")
def get_category(category_id: int):
    return jsonify(CategoryService(db.session).get_category(category_id).as_dict())


@category_bp.post("")
def create_category():
    data = json_object(request.get_json(silent=True))
    category = CategoryService(db.session).create_category(data)
    return jsonify(category.as_dict()), 201


@category_bp.put("/<int:category_id>")
def update_category(category_id: int):
    data = json_object(request.get_json(silent=True))
    category = CategoryService(db.session).update_category(category_id, data)
    return jsonify(category.as_dict())
