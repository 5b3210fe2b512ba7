from functools import wraps
from flask import abort
from flask_login import current_user

from models import ROLE_ADMIN


def role_required(*roles):
    """Restricts access to authenticated users holding one of ``roles``."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                abort(401)  # Unauthorized - not logged in
            if current_user.role not in roles:
                abort(403)  # Forbidden - wrong role
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def admin_required(f):
    """Restricts access to users with the 'Administrator' role."""
    return role_required(ROLE_ADMIN)(f)
