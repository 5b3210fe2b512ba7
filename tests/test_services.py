from models import SchoolClass, Subject, ClassSubject
from services import (
    get_all_classes,
    get_all_subjects,
    get_all_teachers,
    get_class_details,
    get_subject_details,
    create_class,
    update_class,
    delete_class,
    create_subject,
    update_subject,
    delete_subject,
)


def test_teachers_are_listed_by_username(demo):
    teachers = get_all_teachers()

    assert [t['username'] for t in teachers] == ['andrej.zupan', 'janez.novak', 'maja.kovac']
    assert {t['teacher_id'] for t in teachers} == {1, 2, 3}


def test_class_list_has_derived_counts(demo):
    classes = {c['class_code']: c for c in get_all_classes()}

    assert classes['R3A']['student_count'] == 2
    assert classes['R3A']['subject_count'] == 2
    assert classes['R3A']['teacher_name'] == 'janez.novak'
    assert classes['R3B']['homeroom_teacher_id'] == 2


def test_class_details(demo):
    class_id = SchoolClass.query.filter_by(class_code='R3B').one().id

    details = get_class_details(class_id)

    assert details['title'] == 'Class R3B'
    assert details['teacher_name'] == 'maja.kovac'
    assert details['student_count'] == 2
    assert get_class_details(class_id + 100) is None


def test_create_class_returns_new_id(demo):
    new_id = create_class({'class_code': 'R4A', 'title': '4. razred A', 'homeroom_teacher_id': 3})

    assert new_id is not None
    assert get_class_details(new_id)['class_code'] == 'R4A'


def test_create_class_rejects_bad_data(demo):
    assert create_class({'class_code': 'X' * 11, 'title': 'Too long', 'homeroom_teacher_id': 1}) is None
    assert create_class({'class_code': 'R9', 'title': '', 'homeroom_teacher_id': 1}) is None
    assert create_class({'class_code': 'R9', 'title': 'No teacher', 'homeroom_teacher_id': None}) is None
    assert create_class({'class_code': 'R9', 'title': 'Bad teacher', 'homeroom_teacher_id': 42}) is None
    assert create_class({'class_code': 'R9', 'title': 'Huge teacher', 'homeroom_teacher_id': 10 ** 20}) is None
    assert SchoolClass.query.filter_by(class_code='R9').first() is None


def test_update_class_keeps_own_code(demo):
    class_obj = SchoolClass.query.filter_by(class_code='R3A').one()

    assert update_class(class_obj.id, {'class_code': 'R3A', 'title': 'New title', 'homeroom_teacher_id': 2})
    assert get_class_details(class_obj.id)['title'] == 'New title'


def test_update_class_refuses_code_of_other_class(demo):
    class_obj = SchoolClass.query.filter_by(class_code='R3A').one()

    assert not update_class(class_obj.id, {'class_code': 'R3B', 'title': 'Clash', 'homeroom_teacher_id': 1})
    assert not update_class(9999, {'class_code': 'R5', 'title': 'Missing', 'homeroom_teacher_id': 1})


def test_delete_class_refused_while_subjects_assigned(db, demo):
    class_obj = SchoolClass.query.filter_by(class_code='R3B').one()
    for enrollment in list(class_obj.enrollments):
        db.session.delete(enrollment)
    db.session.commit()

    assert not delete_class(class_obj.id)

    ClassSubject.query.filter_by(class_id=class_obj.id).delete()
    db.session.commit()

    assert delete_class(class_obj.id)
    assert not delete_class(class_obj.id)


def test_subject_list_counts_classes_and_teachers(demo):
    subjects = {s['name']: s for s in get_all_subjects()}

    assert subjects['Matematika']['class_count'] == 2
    assert subjects['Matematika']['teacher_count'] == 1
    assert subjects['Fizika']['class_count'] == 0
    assert subjects['Fizika']['teacher_count'] == 0


def test_subject_crud(demo):
    subject_id = create_subject({'name': '  Biologija  '})
    assert get_subject_details(subject_id)['name'] == 'Biologija'

    assert update_subject(subject_id, {'name': 'Biologija 2'})
    assert not update_subject(subject_id, {'name': ''})
    assert not update_subject(subject_id + 100, {'name': 'Nope'})

    assert delete_subject(subject_id)
    assert get_subject_details(subject_id) is None
    assert not delete_subject(subject_id)


def test_create_subject_rejects_blank_and_long_names(demo):
    assert create_subject({'name': ''}) is None
    assert create_subject({'name': 'x' * 101}) is None


def test_delete_subject_refused_while_assigned(demo):
    subject = Subject.query.filter_by(name='Angleščina').one()

    assert not delete_subject(subject.id)
    assert get_subject_details(subject.id) is not None
