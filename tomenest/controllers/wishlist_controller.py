from flask import Blueprint, jsonify, request

from tomenest.models.book import cover_url_for
from tomenest.services.container import services
from tomenest.utils.decorators import admin_required, login_required
from tomenest.utils.serializers import wishlist_row

wishlist_bp = Blueprint("wishlist", __name__)


@wishlist_bp.post("/toggle")
@login_required
def wishlist_toggle(principal):
    data = request.get_json(silent=True) or {}
    wished = services().wishlist.toggle(principal, data.get("olid"), snapshot=data)
    return jsonify({"success": True, "wished": wished})


@wishlist_bp.get("/ids")
@login_required
def wishlist_ids(principal):
    return jsonify({"success": True, "data": services().wishlist.ids(principal)})


@wishlist_bp.get("/my")
@login_required
def wishlist_my(principal):
    rows = services().wishlist.list_mine(principal)
    return jsonify({"success": True, "data": [wishlist_row(w) for w in rows]})


@wishlist_bp.get("/admin/summary")
@admin_required
def wishlist_admin_summary(principal):
    rows = services().wishlist.admin_summary(principal)
    return jsonify({"success": True, "data": [
        {
            "openlibraryid": r.openlibraryid,
            "title": r.title,
            "author": r.author,
            "coverurl": r.cover_url or cover_url_for(r.openlibraryid),
            "wishcount": int(r.wishcount),
        } for r in rows
    ]})
