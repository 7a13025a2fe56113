from flask import Blueprint, jsonify, request, session

from tomenest.services.container import services
from tomenest.utils.decorators import login_required
from tomenest.utils.serializers import public_user

auth_bp = Blueprint("auth", __name__)


def _start_session(user):
    # session fixation'a karşı önce temizle
    session.clear()
    session["user_id"] = int(user.id)
    session.permanent = True


@auth_bp.post("/register", endpoint="auth_register")
def register():
    data = request.get_json(silent=True) or {}

    user = services().auth.register(
        email=data.get("email"),
        name=data.get("name"),
        password=data.get("password"),
    )
    _start_session(user)
    return jsonify({"success": True, "user": public_user(user)}), 201


@auth_bp.post("/login", endpoint="auth_login")
def login():
    data = request.get_json(silent=True) or {}

    token, user = services().auth.login(data.get("email"), data.get("password"))
    _start_session(user)
    return jsonify({
        "success": True,
        "access_token": token,
        "user": public_user(user)
    })


@auth_bp.post("/logout", endpoint="auth_logout")
def logout():
    session.clear()
    return jsonify({"success": True, "message": "Çıkış yapıldı"})


@auth_bp.get("/me", endpoint="auth_me")
@login_required
def me(principal):
    user = services().auth.get_user(principal.id)
    return jsonify({"success": True, "user": public_user(user)})
