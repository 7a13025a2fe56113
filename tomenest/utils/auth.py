from dataclasses import dataclass

from flask import session
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from tomenest.errors import AuthenticationError, AuthorizationError
from tomenest.models.user import ROLE_ADMIN
from tomenest.repositories.user_repo import UserRepo


@dataclass(frozen=True)
class Principal:
    """İsteği yapan kullanıcı. Handler'lara açıkça parametre olarak geçirilir."""

    id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def _identity_from_request():
    uid = session.get("user_id")
    if uid is not None:
        return uid

    # session yoksa Authorization: Bearer <jwt> dene
    try:
        if verify_jwt_in_request(optional=True) is None:
            return None
        return get_jwt_identity()
    except (JWTExtendedException, PyJWTError):
        raise AuthenticationError("Geçersiz veya süresi dolmuş token")


def resolve_principal(users: UserRepo | None = None) -> Principal | None:
    uid = _identity_from_request()
    if uid is None:
        return None
    try:
        uid = int(uid)
    except (TypeError, ValueError):
        return None

    # rol her istekte DB'den okunur (rol değişikliği anında geçerli olsun)
    user = (users or UserRepo()).get_by_id(uid)
    if not user:
        return None
    return Principal(id=int(user.id), role=user.role)


def require_user(users: UserRepo | None = None) -> Principal:
    principal = resolve_principal(users)
    if principal is None:
        raise AuthenticationError()
    return principal


def require_admin(users: UserRepo | None = None) -> Principal:
    principal = require_user(users)
    ensure_admin(principal)
    return principal


def ensure_admin(principal: Principal):
    if principal is None:
        raise AuthenticationError()
    if not principal.is_admin:
        raise AuthorizationError("Yetkisiz (admin gerekli)")
