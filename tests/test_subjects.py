import pytest

from admin_routes import messages
from models import Subject
from conftest import SUBJECTS_URL, extract_token, post_form


def subjects_by_name(db):
    db.session.expire_all()
    return {s.name: s for s in Subject.query.all()}


def test_list_shows_subjects_with_usage_counts(admin_client):
    html = admin_client.get(SUBJECTS_URL).get_data(as_text=True)

    assert 'Seznam predmetov' in html
    for name in ('Matematika', 'Slovenščina', 'Angleščina', 'Fizika'):
        assert name in html


def test_create_subject(admin_client, db):
    response = post_form(admin_client, SUBJECTS_URL, {'create_subject': '1', 'subject_name': '  Kemija '})

    assert messages.SUBJECT_CREATED in response.get_data(as_text=True)
    assert 'Kemija' in subjects_by_name(db)


def test_create_subject_with_blank_name_creates_nothing(admin_client, db):
    before = set(subjects_by_name(db))

    response = post_form(admin_client, SUBJECTS_URL, {'create_subject': '1', 'subject_name': '   '})

    assert messages.SUBJECT_NAME_REQUIRED in response.get_data(as_text=True)
    assert set(subjects_by_name(db)) == before


def test_update_subject(admin_client, db):
    subject_id = subjects_by_name(db)['Fizika'].id

    response = post_form(admin_client, SUBJECTS_URL, {
        'update_subject': '1',
        'subject_id': str(subject_id),
        'subject_name': 'Fizika II',
    })

    assert messages.SUBJECT_UPDATED in response.get_data(as_text=True)
    assert subjects_by_name(db)['Fizika II'].id == subject_id


def test_update_nonexistent_subject_fails(admin_client, db):
    before = set(subjects_by_name(db))

    response = post_form(admin_client, SUBJECTS_URL, {
        'update_subject': '1',
        'subject_id': '999',
        'subject_name': 'Ghost',
    })

    assert messages.SUBJECT_UPDATE_FAILED in response.get_data(as_text=True)
    assert set(subjects_by_name(db)) == before


def test_update_checks_id_and_name_together(admin_client):
    response = post_form(admin_client, SUBJECTS_URL, {
        'update_subject': '1',
        'subject_id': 'x',
        'subject_name': '',
    })
    html = response.get_data(as_text=True)

    assert messages.SUBJECT_ID_INVALID in html
    assert messages.SUBJECT_NAME_REQUIRED in html


def test_delete_unused_subject(admin_client, db):
    subject_id = subjects_by_name(db)['Fizika'].id

    response = post_form(admin_client, SUBJECTS_URL, {'delete_subject': '1', 'subject_id': str(subject_id)})

    assert messages.SUBJECT_DELETED in response.get_data(as_text=True)
    assert 'Fizika' not in subjects_by_name(db)


def test_delete_subject_assigned_to_classes_is_refused(admin_client, db):
    subject_id = subjects_by_name(db)['Matematika'].id

    response = post_form(admin_client, SUBJECTS_URL, {'delete_subject': '1', 'subject_id': str(subject_id)})

    assert messages.SUBJECT_DELETE_FAILED in response.get_data(as_text=True)
    assert 'Matematika' in subjects_by_name(db)


@pytest.mark.parametrize('subject_id', ['', '0', '-1', 'one'])
def test_delete_with_invalid_id_is_a_validation_error(admin_client, subject_id):
    response = post_form(admin_client, SUBJECTS_URL, {'delete_subject': '1', 'subject_id': subject_id})

    assert messages.SUBJECT_ID_INVALID in response.get_data(as_text=True)


def test_invalid_csrf_token_blocks_delete(admin_client, db):
    subject_id = subjects_by_name(db)['Fizika'].id

    response = admin_client.post(SUBJECTS_URL, data={
        'delete_subject': '1',
        'subject_id': str(subject_id),
        'csrf_token': 'forged',
    })

    assert messages.CSRF_INVALID in response.get_data(as_text=True)
    assert 'Fizika' in subjects_by_name(db)
    assert extract_token(response)


def test_get_with_subject_id_prefills_edit_dialog(admin_client, db):
    subject_id = subjects_by_name(db)['Angleščina'].id

    html = admin_client.get(f'{SUBJECTS_URL}?subject_id={subject_id}').get_data(as_text=True)

    assert 'data-open-on-load' in html
    assert f'name="subject_id" value="{subject_id}"' in html
    assert 'value="Angleščina"' in html


def test_get_with_unknown_subject_id_has_no_details(admin_client):
    html = admin_client.get(f'{SUBJECTS_URL}?subject_id=12345').get_data(as_text=True)

    assert 'data-open-on-load' not in html


def test_teacher_cannot_open_subject_page(teacher_client):
    assert teacher_client.get(SUBJECTS_URL).status_code == 403


def test_oversized_subject_id_is_rejected_without_error_page(admin_client, db):
    huge = '9' * 20
    before = set(subjects_by_name(db))

    page = admin_client.get(f'{SUBJECTS_URL}?subject_id={huge}')
    update = post_form(admin_client, SUBJECTS_URL, {
        'update_subject': '1',
        'subject_id': huge,
        'subject_name': 'Ghost',
    })

    assert page.status_code == 200
    assert 'data-open-on-load' not in page.get_data(as_text=True)
    assert update.status_code == 200
    assert messages.SUBJECT_ID_INVALID in update.get_data(as_text=True)
    assert set(subjects_by_name(db)) == before
