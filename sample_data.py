"""
Demo data for a fresh database: an administrator, three teachers, two
homeroom classes with students, and a handful of subjects.

Safe to run more than once; existing rows (matched by username, class code or
subject name) are reused.
"""

import logging
from datetime import datetime

from werkzeug.security import generate_password_hash

from extensions import db
from models import (
    User, Teacher, Student, SchoolClass, Subject, ClassSubject, Enrollment,
    ROLE_ADMIN, ROLE_TEACHER, ROLE_STUDENT,
)

logger = logging.getLogger(__name__)

DEMO_TEACHERS = ['janez.novak', 'maja.kovac', 'andrej.zupan']
DEMO_TEACHER_PASSWORD = 'Teacher123!'

DEMO_CLASSES = [
    # (class_code, title, homeroom teacher username)
    ('R3A', 'Class R3A', 'janez.novak'),
    ('R3B', 'Class R3B', 'maja.kovac'),
]

DEMO_SUBJECTS = ['Matematika', 'Slovenščina', 'Angleščina', 'Fizika']

DEMO_STUDENTS = [
    # (first name, last name, class code)
    ('Ana', 'Kranjc', 'R3A'),
    ('Luka', 'Horvat', 'R3A'),
    ('Eva', 'Potočnik', 'R3B'),
    ('Jan', 'Mlakar', 'R3B'),
]

# (class code, subject name, teacher username)
DEMO_ASSIGNMENTS = [
    ('R3A', 'Matematika', 'janez.novak'),
    ('R3A', 'Slovenščina', 'maja.kovac'),
    ('R3B', 'Matematika', 'janez.novak'),
    ('R3B', 'Angleščina', 'andrej.zupan'),
]


def _get_or_create_user(username, password, role):
    user = User.query.filter_by(username=username).first()
    if user is None:
        user = User(
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            created_at=datetime.utcnow(),
        )
        db.session.add(user)
        db.session.flush()
    return user


def ensure_admin(username='admin', password='admin'):
    return _get_or_create_user(username, password, ROLE_ADMIN)


def ensure_teacher(username, password=DEMO_TEACHER_PASSWORD):
    user = _get_or_create_user(username, password, ROLE_TEACHER)
    if user.teacher is None:
        db.session.add(Teacher(user=user))
        db.session.flush()
    return user.teacher


def seed_demo_data(admin_password='admin'):
    """Insert the demo rows and commit. Returns a count summary."""
    ensure_admin(password=admin_password)
    teachers = {username: ensure_teacher(username) for username in DEMO_TEACHERS}

    classes = {}
    for class_code, title, teacher_username in DEMO_CLASSES:
        class_obj = SchoolClass.query.filter_by(class_code=class_code).first()
        if class_obj is None:
            class_obj = SchoolClass(class_code=class_code, title=title,
                                    homeroom_teacher_id=teachers[teacher_username].id)
            db.session.add(class_obj)
            db.session.flush()
        classes[class_code] = class_obj

    subjects = {}
    for name in DEMO_SUBJECTS:
        subject = Subject.query.filter_by(name=name).first()
        if subject is None:
            subject = Subject(name=name)
            db.session.add(subject)
            db.session.flush()
        subjects[name] = subject

    for class_code, subject_name, teacher_username in DEMO_ASSIGNMENTS:
        exists = ClassSubject.query.filter_by(class_id=classes[class_code].id,
                                              subject_id=subjects[subject_name].id).first()
        if exists is None:
            db.session.add(ClassSubject(class_id=classes[class_code].id,
                                        subject_id=subjects[subject_name].id,
                                        teacher_id=teachers[teacher_username].id))

    for first_name, last_name, class_code in DEMO_STUDENTS:
        username = f'{first_name}.{last_name}'.lower()
        user = _get_or_create_user(username, 'Student123!', ROLE_STUDENT)
        if user.student is None:
            student = Student(user=user, first_name=first_name,
                              last_name=last_name, class_code=class_code)
            db.session.add(student)
            db.session.flush()
            db.session.add(Enrollment(student_id=student.id, class_id=classes[class_code].id))

    db.session.commit()
    logger.info("Demo data seeded")
    return {
        'teachers': len(teachers),
        'classes': len(classes),
        'subjects': len(subjects),
    }
