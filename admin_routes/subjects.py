"""
Subject management routes for administrators.
"""

from flask import Blueprint, render_template
from flask_login import login_required

from decorators import admin_required
from services import (
    get_all_subjects,
    get_subject_details,
    create_subject,
    update_subject,
    delete_subject,
)
from . import messages
from .pages import Action, PageRequest, PageState, audit, clean_text, issue_csrf_token, parse_positive_int, run_page

bp = Blueprint('subjects', __name__)

RESOURCE = 'subject'


def _create(page_request, state):
    name = clean_text(page_request.form.get('subject_name'))
    if not name:
        state.error(messages.SUBJECT_NAME_REQUIRED)
        return

    new_id = create_subject({'name': name})
    audit(page_request, 'create_subject', {'name': name}, new_id is not None, messages.SUBJECT_CREATE_FAILED)
    if new_id is not None:
        state.success(messages.SUBJECT_CREATED)
    else:
        state.error(messages.SUBJECT_CREATE_FAILED)


def _update(page_request, state):
    subject_id = parse_positive_int(page_request.form.get('subject_id'))
    name = clean_text(page_request.form.get('subject_name'))

    errors = []
    if subject_id is None:
        errors.append(messages.SUBJECT_ID_INVALID)
    if not name:
        errors.append(messages.SUBJECT_NAME_REQUIRED)
    if errors:
        state.error(' '.join(errors))
        return

    updated = update_subject(subject_id, {'name': name})
    audit(page_request, 'update_subject', {'subject_id': subject_id, 'name': name}, updated,
          messages.SUBJECT_UPDATE_FAILED)
    if updated:
        state.success(messages.SUBJECT_UPDATED)
    else:
        state.error(messages.SUBJECT_UPDATE_FAILED)


def _delete(page_request, state):
    subject_id = parse_positive_int(page_request.form.get('subject_id'))
    if subject_id is None:
        state.error(messages.SUBJECT_ID_INVALID)
        return

    deleted = delete_subject(subject_id)
    audit(page_request, 'delete_subject', {'subject_id': subject_id}, deleted, messages.SUBJECT_DELETE_FAILED)
    if deleted:
        state.success(messages.SUBJECT_DELETED)
    else:
        state.error(messages.SUBJECT_DELETE_FAILED)


HANDLERS = {
    Action.CREATE: _create,
    Action.UPDATE: _update,
    Action.DELETE: _delete,
}


def handle_subjects_page(page_request):
    """Run one request against the subject page and return what to render."""
    state = PageState()

    if page_request.is_post:
        run_page(page_request, state, RESOURCE, HANDLERS)
    else:
        subject_id = parse_positive_int(page_request.args.get('subject_id'))
        if subject_id is not None:
            state.details = get_subject_details(subject_id)

    state.items = get_all_subjects()
    issue_csrf_token(state)
    return state


@bp.route('/subjects', methods=['GET', 'POST'])
@login_required
@admin_required
def manage_subjects():
    """Subjects management page."""
    page = handle_subjects_page(PageRequest.from_flask())
    return render_template('admin/manage_subjects.html', page=page, section='subjects')
