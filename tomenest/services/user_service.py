from flask import current_app

from tomenest.database import atomic
from tomenest.errors import ConflictError, NotFoundError, ValidationError
from tomenest.models.user import ROLE_ADMIN, ROLES
from tomenest.repositories.user_repo import UserRepo
from tomenest.utils.validation import parse_id
from tomenest.utils.auth import Principal, ensure_admin


class UserService:
    def __init__(self, users: UserRepo):
        self.users = users

    def list_users(self, principal: Principal):
        ensure_admin(principal)
        return self.users.list_all()

    def set_role(self, principal: Principal, target_user_id, role):
        ensure_admin(principal)
        target_user_id = parse_id(target_user_id, "userId")

        role = (str(role) if role is not None else "").strip().lower()
        if role not in ROLES:
            raise ValidationError("role 'user' veya 'admin' olmalı")

        # admin kendi admin yetkisini kaldıramaz
        # NOT: başka bir admin son admini düşürebilir, bilerek engellenmiyor
        if target_user_id == principal.id and role != ROLE_ADMIN:
            raise ConflictError("Kendi admin rolünüzü kaldıramazsınız")

        with atomic():
            user = self.users.get_by_id(target_user_id)
            if not user:
                raise NotFoundError("Kullanıcı bulunamadı")
            if user.role == role:
                raise ConflictError(f"Kullanıcı zaten '{role}' rolünde")
            self.users.set_role(target_user_id, role)

        current_app.logger.info(f"[users] role changed user={target_user_id} role={role} by={principal.id}")
        return True
