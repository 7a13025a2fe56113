from flask import Flask, jsonify, request

from tomenest.config import Config
from tomenest.database import ensure_schema
from tomenest.errors import register_error_handlers
from tomenest.extensions import db, jwt, migrate
from tomenest.services.container import EXTENSION_KEY, build_services


def create_app(config_object=Config, catalog=None, **overrides):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config.update(overrides)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # 1) Önce db init (db.engine / db.session için şart)
    db.init_app(app)
    migrate.init_app(app, db, directory=app.config["MIGRATIONS_DIR"])
    jwt.init_app(app)

    # 2) Şema açılışta bir kez kurulur (upgrade için migrate kayıtlı olmalı)
    ensure_schema(app)

    # 3) Composition root: servisler açık bağımlılıklarla kurulur
    app.extensions[EXTENSION_KEY] = build_services(app, catalog=catalog)

    register_error_handlers(app)
    _register_cors(app)

    # 4) API blueprintleri
    from tomenest.controllers.auth_controller import auth_bp
    from tomenest.controllers.book_controller import book_bp
    from tomenest.controllers.rental_controller import rental_bp
    from tomenest.controllers.stock_controller import stock_bp
    from tomenest.controllers.user_controller import user_bp
    from tomenest.controllers.wishlist_controller import wishlist_bp
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(book_bp, url_prefix="/api")
    app.register_blueprint(stock_bp, url_prefix="/api/stock")
    app.register_blueprint(wishlist_bp, url_prefix="/api/wishlist")
    app.register_blueprint(rental_bp, url_prefix="/api/rentals")
    app.register_blueprint(user_bp, url_prefix="/api/admin")

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    return app


def _register_cors(app):
    allowed = app.config.get("CORS_ORIGINS") or []

    def _origin_allowed(origin):
        return bool(origin) and ("*" in allowed or origin in allowed)

    @app.before_request
    def _preflight():
        if request.method == "OPTIONS" and _origin_allowed(request.headers.get("Origin")):
            return "", 204

    @app.after_request
    def _cors_headers(resp):
        origin = request.headers.get("Origin")
        if _origin_allowed(origin):
            # cookie tabanlı session için credentials gerekli, "*" dönülemez
            resp.headers["Access-Control-Allow-Origin"] = origin
            resp.headers["Vary"] = "Origin"
            resp.headers["Access-Control-Allow-Credentials"] = "true"
            resp.headers["Access-Control-Allow-Headers"] = "Content-Type, Accept, Authorization"
            resp.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        return resp
