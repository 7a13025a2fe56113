# tomenest/controllers/book_controller.py

from flask import Blueprint, jsonify, request

from tomenest.services.container import services
from tomenest.utils.decorators import admin_required

book_bp = Blueprint("books", __name__)


@book_bp.get("/openlibrary/search")
def openlibrary_search():
    data = services().books.search(request.args.get("q"), request.args.get("limit", 20))
    return jsonify({"success": True, "data": data})


@book_bp.get("/openlibrary/edition")
def openlibrary_edition():
    mapped, raw = services().books.edition(request.args.get("olid"))
    return jsonify({"success": True, "data": mapped, "raw": raw})


@book_bp.post("/openlibrary/resolve-editions")
def openlibrary_resolve_editions():
    data = request.get_json(silent=True) or {}
    return jsonify({"success": True, "data": services().books.resolve_editions(data.get("works"))})


@book_bp.post("/books/import-edition")
@admin_required
def import_edition(principal):
    data = request.get_json(silent=True) or {}
    olid = services().books.import_edition(principal, data.get("olid"))
    return jsonify({"success": True, "openlibraryid": olid})
