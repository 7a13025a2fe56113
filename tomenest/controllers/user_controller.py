from flask import Blueprint, jsonify, request

from tomenest.services.container import services
from tomenest.utils.decorators import admin_required
from tomenest.utils.serializers import public_user

user_bp = Blueprint("users", __name__)


@user_bp.get("/users")
@admin_required
def users_list(principal):
    users = services().users.list_users(principal)
    return jsonify({"success": True, "data": [public_user(u) for u in users]})


@user_bp.post("/users/role")
@admin_required
def users_set_role(principal):
    data = request.get_json(silent=True) or {}
    services().users.set_role(principal, data.get("userId"), data.get("role"))
    return jsonify({"success": True})
