"""
Business logic and services. Keeps app.py as glue-only (config, blueprints, extensions).
"""

from .activity_log import log_activity
from .teachers import get_all_teachers, teacher_exists
from .classes import (
    get_all_classes,
    get_class_details,
    create_class,
    update_class,
    delete_class,
)
from .subjects import (
    get_all_subjects,
    get_subject_details,
    create_subject,
    update_subject,
    delete_subject,
)

__all__ = [
    'log_activity',
    'get_all_teachers',
    'teacher_exists',
    'get_all_classes',
    'get_class_details',
    'create_class',
    'update_class',
    'delete_class',
    'get_all_subjects',
    'get_subject_details',
    'create_subject',
    'update_subject',
    'delete_subject',
]
