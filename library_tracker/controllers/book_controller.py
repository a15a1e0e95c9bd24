from flask import Blueprint, request, jsonify

from library_tracker.extensions import db
from library_tracker.services.book_service import BookService
from library_tracker.utils.validators import json_object

book_bp = Blueprint("books", __name__, url_prefix="/books")


@book_bp.get("")
def list_books():
    books = BookService(db.session).list_books(
        category_id=request.args.get("categoryId"),
        search=request.args.get("search"),
    )
    return jsonify([b.as_dict() for b in books])


@book_bp.get("/<int:book_id>")
def get_book(book_id: int):
    book = BookService(db.session).get_book(book_id)
    return jsonify(book.as_dict())


@book_bp.post("")
def create_book():
    data = json_object(request.get_json(silent=True))
    book = BookService(db.session).create_book(data)
    return jsonify(book.as_dict()), 201


@book_bp.put("/<int:book_id>")
def update_book(book_id: int):
    data = json_object(request.get_json(silent=True))
    book = BookService(db.session).update_book(book_id, data)
    return jsonify(book.as_dict())


@book_bp.delete("/<int:book_id>")
def delete_book(book_id: int):
    BookService(db.session).delete_book(book_id)
    return jsonify({"message": "Book deleted successfully"})
