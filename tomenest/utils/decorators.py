from functools import wraps

from tomenest.utils.auth import require_admin, require_user


def login_required(view):
    """Principal'ı çözer ve view'a ilk argüman olarak verir. Yoksa 401."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        principal = require_user()
        return view(principal, *args, **kwargs)
    return wrapped


def admin_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        principal = require_admin()
        return view(principal, *args, **kwargs)
    return wrapped
