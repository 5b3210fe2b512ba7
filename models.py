from flask_login import UserMixin
from datetime import datetime
from extensions import db

ROLE_ADMIN = 'Administrator'
ROLE_TEACHER = 'Teacher'
ROLE_STUDENT = 'Student'
ROLE_PARENT = 'Parent'

# Upper bound of an INTEGER id column
MAX_ID = 2 ** 31 - 1


class User(db.Model, UserMixin):
    """
    User model for authentication and roles. Stores login credentials for
    all types of users (administrators, teachers, students, parents).
    """
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(50), nullable=False)  # e.g., 'Administrator', 'Teacher'
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def __repr__(self):
        return f"User('{self.username}', Role: '{self.role}')"


class Teacher(db.Model):
    """
    Teacher profile. The display name is the linked user's username.
    """
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), unique=True, nullable=False)

    user = db.relationship('User', backref=db.backref('teacher', uselist=False), lazy=True)

    @property
    def username(self):
        return self.user.username if self.user else None

    def __repr__(self):
        return f"Teacher(User: {self.user_id})"


class Student(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), unique=True, nullable=False)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    class_code = db.Column(db.String(10), nullable=False)

    user = db.relationship('User', backref=db.backref('student', uselist=False), lazy=True)

    def __repr__(self):
        return f"Student('{self.first_name} {self.last_name}')"


class Subject(db.Model):
    """
    Model for storing subjects (courses) taught in classes.
    """
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)

    def __repr__(self):
        return f"Subject('{self.name}')"


class SchoolClass(db.Model):
    """
    Homeroom class: an administrative group of students tied to one teacher.
    """
    __tablename__ = 'school_class'

    id = db.Column(db.Integer, primary_key=True)
    class_code = db.Column(db.String(10), unique=True, nullable=False)
    title = db.Column(db.String(100), nullable=False)
    homeroom_teacher_id = db.Column(db.Integer, db.ForeignKey('teacher.id'), nullable=False)

    homeroom_teacher = db.relationship('Teacher', backref='homeroom_classes', lazy=True)

    def __repr__(self):
        return f"SchoolClass('{self.title}', Code: '{self.class_code}')"


class ClassSubject(db.Model):
    """
    Assignment of a subject to a class, taught by one teacher.
    """
    __table_args__ = (db.UniqueConstraint('class_id', 'subject_id'),)

    id = db.Column(db.Integer, primary_key=True)
    class_id = db.Column(db.Integer, db.ForeignKey('school_class.id'), nullable=False)
    subject_id = db.Column(db.Integer, db.ForeignKey('subject.id'), nullable=False)
    teacher_id = db.Column(db.Integer, db.ForeignKey('teacher.id'), nullable=False)

    school_class = db.relationship('SchoolClass', backref='class_subjects')
    subject = db.relationship('Subject', backref='class_subjects')
    teacher = db.relationship('Teacher', backref='class_subjects')

    def __repr__(self):
        return f"ClassSubject(Class: {self.class_id}, Subject: {self.subject_id})"


class Enrollment(db.Model):
    """
    Model for tracking student enrollment in classes.
    """
    __table_args__ = (db.UniqueConstraint('student_id', 'class_id'),)

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('student.id'), nullable=False)
    class_id = db.Column(db.Integer, db.ForeignKey('school_class.id'), nullable=False)

    student = db.relationship('Student', backref='enrollments')
    school_class = db.relationship('SchoolClass', backref='enrollments')

    def __repr__(self):
        return f"Enrollment(Student: {self.student_id}, Class: {self.class_id})"


class ActivityLog(db.Model):
    """
    Model for tracking user activities for auditing and security purposes.
    """
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    action = db.Column(db.String(100), nullable=False)
    details = db.Column(db.Text, nullable=True)
    ip_address = db.Column(db.String(45), nullable=True)
    user_agent = db.Column(db.Text, nullable=True)
    success = db.Column(db.Boolean, default=True)
    error_message = db.Column(db.Text, nullable=True)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)

    user = db.relationship('User', backref='activity_logs', lazy=True)

    def __repr__(self):
        return f"ActivityLog(User: {self.user_id}, Action: {self.action}, Success: {self.success})"
