from flask import Blueprint, jsonify, request

from tomenest.services.container import services
from tomenest.utils.decorators import admin_required
from tomenest.utils.serializers import stock_row
from tomenest.utils.validation import parse_bool

stock_bp = Blueprint("stock", __name__)


@stock_bp.get("/list")
def stock_list():
    rows = services().stock.list_stock()
    return jsonify({"success": True, "data": [stock_row(s) for s in rows]})


@stock_bp.post("/set")
@admin_required
def stock_set(principal):
    data = request.get_json(silent=True) or {}
    stock_id = services().stock.set_stock(
        principal,
        olid=data.get("olid"),
        quality=data.get("quality"),
        quantity=data.get("quantity"),
        import_if_missing=parse_bool(data.get("importIfMissing"), default=True),
    )
    return jsonify({"success": True, "stockid": stock_id})


@stock_bp.post("/delete")
@admin_required
def stock_delete(principal):
    data = request.get_json(silent=True) or {}
    services().stock.delete_stock(principal, data.get("stockId"))
    return jsonify({"success": True})
