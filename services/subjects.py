"""
Persistence gateway for subjects.
"""

import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models import Subject, ClassSubject

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 100


def _clean_name(subject_data):
    name = str(subject_data.get('name') or '').strip()
    if not name or len(name) > NAME_MAX_LENGTH:
        return None
    return name


def get_all_subjects():
    """Return all subjects with the number of classes and teachers using them."""
    usage = db.session.query(
        ClassSubject.subject_id.label('subject_id'),
        func.count(func.distinct(ClassSubject.class_id)).label('class_count'),
        func.count(func.distinct(ClassSubject.teacher_id)).label('teacher_count'),
    ).group_by(ClassSubject.subject_id).subquery()

    rows = db.session.query(Subject, usage.c.class_count, usage.c.teacher_count) \
        .outerjoin(usage, usage.c.subject_id == Subject.id) \
        .order_by(Subject.name) \
        .all()

    return [{
        'subject_id': subject.id,
        'name': subject.name,
        'class_count': class_count or 0,
        'teacher_count': teacher_count or 0,
    } for subject, class_count, teacher_count in rows]


def get_subject_details(subject_id):
    subject = db.session.get(Subject, subject_id)
    if subject is None:
        return None
    assignments = ClassSubject.query.filter_by(subject_id=subject_id).all()
    return {
        'subject_id': subject.id,
        'name': subject.name,
        'class_count': len({a.class_id for a in assignments}),
        'teacher_count': len({a.teacher_id for a in assignments}),
    }


def create_subject(subject_data):
    """Create a subject from ``{'name': ...}``. Returns the new id or ``None``."""
    name = _clean_name(subject_data)
    if name is None:
        return None

    try:
        subject = Subject(name=name)
        db.session.add(subject)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error creating subject '{name}': {str(e)}")
        return None

    logger.info(f"Created subject {subject.id} ('{name}')")
    return subject.id


def update_subject(subject_id, subject_data):
    subject = db.session.get(Subject, subject_id)
    if subject is None:
        logger.warning(f"Cannot update subject {subject_id}: not found")
        return False

    name = _clean_name(subject_data)
    if name is None:
        return False

    try:
        subject.name = name
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error updating subject {subject_id}: {str(e)}")
        return False

    logger.info(f"Updated subject {subject_id}")
    return True


def delete_subject(subject_id):
    """Delete a subject unless a class still has it assigned."""
    subject = db.session.get(Subject, subject_id)
    if subject is None:
        logger.warning(f"Cannot delete subject {subject_id}: not found")
        return False

    if ClassSubject.query.filter_by(subject_id=subject_id).first() is not None:
        logger.warning(f"Cannot delete subject {subject_id}: assigned to classes")
        return False

    try:
        db.session.delete(subject)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error deleting subject {subject_id}: {str(e)}")
        return False

    logger.info(f"Deleted subject {subject_id}")
    return True
