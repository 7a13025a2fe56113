from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException


class ServiceError(ValueError):
    """Servis katmanının iş kuralı hataları. HTTP karşılığı status_code/code ile taşınır."""

    status_code = 400
    code = "error"
    default_message = "İstek işlenemedi"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else self.default_message


class ValidationError(ServiceError):
    status_code = 400
    code = "validation"
    default_message = "Geçersiz istek"


class NotFoundError(ServiceError):
    status_code = 404
    code = "not_found"
    default_message = "Kayıt bulunamadı"


class ConflictError(ServiceError):
    status_code = 409
    code = "conflict"
    default_message = "İşlem mevcut durumla çakışıyor"


class AuthenticationError(ServiceError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Unauthorized"


class AuthorizationError(ServiceError):
    status_code = 403
    code = "forbidden"
    default_message = "Forbidden"


class CatalogLookupError(ServiceError):
    status_code = 502
    code = "upstream"
    default_message = "OpenLibrary isteği başarısız"


def json_error(message, status=400, code="error"):
    return jsonify({"success": False, "message": message, "code": code}), status


def register_error_handlers(app):
    @app.errorhandler(ServiceError)
    def _service_error(e: ServiceError):
        if e.status_code == 409:
            current_app.logger.warning(f"[conflict] {e.message}")
        return json_error(e.message, e.status_code, e.code)

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return json_error(e.description or e.name, e.code or 500, e.name.lower().replace(" ", "_"))

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        current_app.logger.exception(f"[unexpected] {e}")
        message = str(e) if current_app.debug else "Beklenmeyen bir hata oluştu"
        return json_error(message, 500, "unexpected")
