from flask import Blueprint, jsonify, request

from tomenest.services.container import services
from tomenest.utils.decorators import admin_required, login_required
from tomenest.utils.serializers import rental_row

rental_bp = Blueprint("rentals", __name__)


# -----------------------------
# User
# -----------------------------
@rental_bp.post("/request")
@login_required
def rental_request(principal):
    data = request.get_json(silent=True) or {}
    r = services().rentals.request_rental(principal, data.get("stockId"), data.get("note"))
    return jsonify({"success": True, "rentalid": r.id, "status": r.status}), 201


@rental_bp.get("/my")
@login_required
def rentals_my(principal):
    rows = services().rentals.list_mine(principal)
    return jsonify({"success": True, "data": [rental_row(r) for r in rows]})


# -----------------------------
# Admin listeleri (her biri önce overdue sweep çalıştırır)
# -----------------------------
@rental_bp.get("/admin/requests")
@admin_required
def admin_requests(principal):
    rows = services().rentals.list_pending_requests(principal)
    return jsonify({"success": True, "data": [rental_row(r, with_user=True) for r in rows]})


@rental_bp.get("/admin/approved")
@admin_required
def admin_approved(principal):
    rows = services().rentals.list_approved(principal)
    return jsonify({"success": True, "data": [rental_row(r, with_user=True) for r in rows]})


@rental_bp.get("/admin/active")
@admin_required
def admin_active(principal):
    rows = services().rentals.list_active(principal)
    return jsonify({"success": True, "data": [rental_row(r, with_user=True) for r in rows]})


# -----------------------------
# Admin geçişleri
# -----------------------------
@rental_bp.post("/admin/approve")
@admin_required
def admin_approve(principal):
    data = request.get_json(silent=True) or {}
    services().rentals.approve_rental(
        principal, data.get("requestId"), data.get("startAt"), data.get("endAt")
    )
    return jsonify({"success": True})


@rental_bp.post("/admin/dismiss")
@admin_required
def admin_dismiss(principal):
    data = request.get_json(silent=True) or {}
    services().rentals.dismiss_rental(principal, data.get("requestId"))
    return jsonify({"success": True})


@rental_bp.post("/admin/complete")
@admin_required
def admin_complete(principal):
    data = request.get_json(silent=True) or {}
    services().rentals.complete_rental(principal, data.get("rentalId"))
    return jsonify({"success": True})


@rental_bp.post("/admin/sweep")
@admin_required
def admin_sweep(principal):
    updated = services().rentals.sweep_overdue()
    return jsonify({"success": True, "updated": updated})
