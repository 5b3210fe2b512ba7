"""
Persistence gateway for homeroom classes.

Every mutating function returns a plain success value (new id, ``True``) or a
failure value (``None``, ``False``); database errors are rolled back and
logged here and never reach the caller.
"""

import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models import SchoolClass, Teacher, User, Enrollment, ClassSubject, MAX_ID
from services.teachers import teacher_exists

logger = logging.getLogger(__name__)

CLASS_CODE_MAX_LENGTH = 10
TITLE_MAX_LENGTH = 100


def _class_to_dict(class_obj, teacher_name=None, student_count=0, subject_count=0):
    return {
        'class_id': class_obj.id,
        'class_code': class_obj.class_code,
        'title': class_obj.title,
        'homeroom_teacher_id': class_obj.homeroom_teacher_id,
        'teacher_name': teacher_name,
        'student_count': student_count or 0,
        'subject_count': subject_count or 0,
    }


def _clean_class_data(class_data):
    """
    Normalize and check class fields.

    Returns a ``(class_code, title, teacher_id)`` tuple, or ``None`` when a
    field is missing, too long or the teacher does not exist.
    """
    class_code = str(class_data.get('class_code') or '').strip()
    title = str(class_data.get('title') or '').strip()
    try:
        teacher_id = int(class_data.get('homeroom_teacher_id'))
    except (TypeError, ValueError):
        return None

    if not class_code or not title or not 0 < teacher_id <= MAX_ID:
        return None
    if len(class_code) > CLASS_CODE_MAX_LENGTH or len(title) > TITLE_MAX_LENGTH:
        logger.warning(f"Class field too long: code='{class_code}', title='{title}'")
        return None
    if not teacher_exists(teacher_id):
        logger.warning(f"Homeroom teacher {teacher_id} does not exist")
        return None
    return class_code, title, teacher_id


def _code_taken(class_code, exclude_id=None):
    query = SchoolClass.query.filter(SchoolClass.class_code == class_code)
    if exclude_id is not None:
        query = query.filter(SchoolClass.id != exclude_id)
    return db.session.query(query.exists()).scalar()


def _count_subquery(model, label):
    return db.session.query(
        model.class_id.label('class_id'),
        func.count(model.id).label(label)
    ).group_by(model.class_id).subquery()


def get_all_classes():
    """Return all classes with teacher name and derived counts, ordered by class code."""
    students = _count_subquery(Enrollment, 'student_count')
    subjects = _count_subquery(ClassSubject, 'subject_count')

    rows = db.session.query(
        SchoolClass,
        User.username,
        students.c.student_count,
        subjects.c.subject_count,
    ).outerjoin(Teacher, SchoolClass.homeroom_teacher_id == Teacher.id) \
        .outerjoin(User, Teacher.user_id == User.id) \
        .outerjoin(students, students.c.class_id == SchoolClass.id) \
        .outerjoin(subjects, subjects.c.class_id == SchoolClass.id) \
        .order_by(SchoolClass.class_code) \
        .all()

    return [_class_to_dict(class_obj, username, student_count, subject_count)
            for class_obj, username, student_count, subject_count in rows]


def get_class_details(class_id):
    """Return one class as a dict, or ``None`` if it does not exist."""
    class_obj = db.session.get(SchoolClass, class_id)
    if class_obj is None:
        return None
    teacher = class_obj.homeroom_teacher
    return _class_to_dict(
        class_obj,
        teacher_name=teacher.username if teacher else None,
        student_count=Enrollment.query.filter_by(class_id=class_id).count(),
        subject_count=ClassSubject.query.filter_by(class_id=class_id).count(),
    )


def create_class(class_data):
    """Create a class from ``class_code``, ``title`` and ``homeroom_teacher_id``. Returns the new id or ``None``."""
    cleaned = _clean_class_data(class_data)
    if cleaned is None:
        return None
    class_code, title, teacher_id = cleaned

    if _code_taken(class_code):
        logger.warning(f"Class code '{class_code}' is already in use")
        return None

    try:
        new_class = SchoolClass(class_code=class_code, title=title, homeroom_teacher_id=teacher_id)
        db.session.add(new_class)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error creating class '{class_code}': {str(e)}")
        return None

    logger.info(f"Created class {new_class.id} ('{class_code}')")
    return new_class.id


def update_class(class_id, class_data):
    class_obj = db.session.get(SchoolClass, class_id)
    if class_obj is None:
        logger.warning(f"Cannot update class {class_id}: not found")
        return False

    cleaned = _clean_class_data(class_data)
    if cleaned is None:
        return False
    class_code, title, teacher_id = cleaned

    if _code_taken(class_code, exclude_id=class_id):
        logger.warning(f"Class code '{class_code}' is already in use")
        return False

    try:
        class_obj.class_code = class_code
        class_obj.title = title
        class_obj.homeroom_teacher_id = teacher_id
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error updating class {class_id}: {str(e)}")
        return False

    logger.info(f"Updated class {class_id}")
    return True


def delete_class(class_id):
    """Delete a class unless students or subjects are still assigned to it."""
    class_obj = db.session.get(SchoolClass, class_id)
    if class_obj is None:
        logger.warning(f"Cannot delete class {class_id}: not found")
        return False

    if Enrollment.query.filter_by(class_id=class_id).first() is not None \
            or ClassSubject.query.filter_by(class_id=class_id).first() is not None:
        logger.warning(f"Cannot delete class {class_id}: students or subjects are assigned")
        return False

    try:
        db.session.delete(class_obj)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error deleting class {class_id}: {str(e)}")
        return False

    logger.info(f"Deleted class {class_id}")
    return True
