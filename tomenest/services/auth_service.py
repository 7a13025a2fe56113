import re

from flask import current_app
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from tomenest.database import atomic
from tomenest.errors import AuthenticationError, ConflictError, ValidationError
from tomenest.models.user import ROLE_ADMIN, ROLE_USER, User
from tomenest.repositories.user_repo import UserRepo
from tomenest.utils.validation import required_str

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PASSWORD_MIN_LEN = 8


class AuthService:
    def __init__(self, users: UserRepo):
        self.users = users

    def register(self, email, name, password) -> User:
        email = required_str(email, "email").lower()
        name = required_str(name, "name")
        password = required_str(password, "password")

        if not EMAIL_RE.match(email):
            raise ValidationError("Geçersiz e-posta")
        if len(password) < PASSWORD_MIN_LEN:
            raise ValidationError(f"Şifre en az {PASSWORD_MIN_LEN} karakter olmalı")

        try:
            with atomic():
                if self.users.get_by_email(email):
                    raise ConflictError("E-posta zaten kayıtlı")

                # ilk kayıt olan kullanıcı admin olur
                role = ROLE_ADMIN if self.users.count() == 0 else ROLE_USER
                user = self.users.create(User(
                    email=email,
                    name=name,
                    password_hash=generate_password_hash(password),
                    role=role,
                ))
                user_id = user.id
        except IntegrityError:
            raise ConflictError("E-posta zaten kayıtlı")

        current_app.logger.info(f"[auth] registered user={user_id} role={role}")
        return self.users.get_by_id(user_id)

    def login(self, email, password):
        email = required_str(email, "email").lower()
        password = required_str(password, "password")

        user = self.users.get_by_email(email)
        if not user or not check_password_hash(user.password_hash, password):
            current_app.logger.warning(f"[auth] failed login email={email}")
            raise AuthenticationError("Hatalı e-posta veya şifre")

        token = create_access_token(
            identity=str(user.id),
            additional_claims={"role": user.role, "email": user.email}
        )
        return token, user

    def get_user(self, user_id: int) -> User:
        user = self.users.get_by_id(user_id)
        if not user:
            raise AuthenticationError("Session kullanıcısı bulunamadı")
        return user
