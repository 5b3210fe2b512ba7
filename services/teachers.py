"""
Read-only teacher lookups used to fill homeroom teacher selection lists.
"""

from extensions import db
from models import Teacher, User, MAX_ID


def get_all_teachers():
    """Return every teacher as ``{'teacher_id', 'username'}``, ordered by username."""
    rows = db.session.query(Teacher.id, User.username) \
        .join(User, Teacher.user_id == User.id) \
        .order_by(User.username) \
        .all()
    return [{'teacher_id': row.id, 'username': row.username} for row in rows]


def teacher_exists(teacher_id):
    if not 0 < teacher_id <= MAX_ID:
        return False
    return db.session.get(Teacher, teacher_id) is not None
