from flask import Blueprint, request, jsonify

from library_tracker.extensions import db
from library_tracker.services.borrow_service import BorrowService, LedgerResult
from library_tracker.utils.validators import json_object

borrow_bp = Blueprint("borrow", __name__)


def _ledger_response(message: str, result: LedgerResult):
    return jsonify({
        "message": message,
        "record": result.record.as_dict(),
        "stock": result.stock,
        "currentQuantity": result.current_quantity,
    })


@borrow_bp.post("/borrow")
def borrow_book():
    data = json_object(request.get_json(silent=True))
    result = BorrowService(db.session).borrow_book(
        data.get("userId"), data.get("bookId"), data.get("quantity", 1)
    )
    return _ledger_response("Book borrowed successfully", result)


@borrow_bp.post("/return")
def return_book():
    data = json_object(request.get_json(silent=True))
    result = BorrowService(db.session).return_book(
        data.get("userId"), data.get("bookId"), data.get("quantity", 1)
    )
    return _ledger_response("Book returned successfully", result)


@borrow_bp.get("/borrow-records")
def borrow_records():
    records = BorrowService(db.session).list_records(
        user_id=request.args.get("userId"),
        book_id=request.args.get("bookId"),
        action=request.args.get("action"),
    )
    return jsonify([x.as_dict(expand=True) for x in records])
