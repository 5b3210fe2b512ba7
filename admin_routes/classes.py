"""
Class (homeroom group) management routes for administrators.
"""

from flask import Blueprint, render_template
from flask_login import login_required

from decorators import admin_required
from services import (
    get_all_classes,
    get_all_teachers,
    get_class_details,
    create_class,
    update_class,
    delete_class,
)
from . import messages
from .pages import Action, PageRequest, PageState, audit, clean_text, issue_csrf_token, parse_positive_int, run_page

bp = Blueprint('classes', __name__)

RESOURCE = 'class'


def _read_class_fields(form, require_id=False):
    """Return ``(class_id, class_data, errors)``; every field is checked before returning."""
    errors = []
    class_id = None
    if require_id:
        class_id = parse_positive_int(form.get('class_id'))
        if class_id is None:
            errors.append(messages.CLASS_ID_INVALID)

    title = clean_text(form.get('class_name'))
    class_code = clean_text(form.get('class_code'))
    teacher_id = parse_positive_int(form.get('homeroom_teacher_id'))

    if not title:
        errors.append(messages.CLASS_NAME_REQUIRED)
    if not class_code:
        errors.append(messages.CLASS_CODE_REQUIRED)
    if teacher_id is None:
        errors.append(messages.CLASS_TEACHER_INVALID)

    class_data = {'title': title, 'class_code': class_code, 'homeroom_teacher_id': teacher_id}
    return class_id, class_data, errors


def _create(page_request, state):
    _, class_data, errors = _read_class_fields(page_request.form)
    if errors:
        state.error(' '.join(errors))
        return

    new_id = create_class(class_data)
    audit(page_request, 'create_class', class_data, new_id is not None, messages.CLASS_CREATE_FAILED)
    if new_id is not None:
        state.success(messages.CLASS_CREATED)
    else:
        state.error(messages.CLASS_CREATE_FAILED)


def _update(page_request, state):
    class_id, class_data, errors = _read_class_fields(page_request.form, require_id=True)
    if errors:
        state.error(' '.join(errors))
        return

    updated = update_class(class_id, class_data)
    audit(page_request, 'update_class', dict(class_data, class_id=class_id), updated,
          messages.CLASS_UPDATE_FAILED)
    if updated:
        state.success(messages.CLASS_UPDATED)
    else:
        state.error(messages.CLASS_UPDATE_FAILED)


def _delete(page_request, state):
    class_id = parse_positive_int(page_request.form.get('class_id'))
    if class_id is None:
        state.error(messages.CLASS_ID_INVALID)
        return

    deleted = delete_class(class_id)
    audit(page_request, 'delete_class', {'class_id': class_id}, deleted, messages.CLASS_DELETE_FAILED)
    if deleted:
        state.success(messages.CLASS_DELETED)
    else:
        state.error(messages.CLASS_DELETE_FAILED)


HANDLERS = {
    Action.CREATE: _create,
    Action.UPDATE: _update,
    Action.DELETE: _delete,
}


def handle_classes_page(page_request):
    """Run one request against the class page and return what to render."""
    state = PageState(teachers=get_all_teachers())

    if page_request.is_post:
        run_page(page_request, state, RESOURCE, HANDLERS)
    else:
        class_id = parse_positive_int(page_request.args.get('class_id'))
        if class_id is not None:
            state.details = get_class_details(class_id)

    state.items = get_all_classes()
    issue_csrf_token(state)
    return state


@bp.route('/classes', methods=['GET', 'POST'])
@login_required
@admin_required
def manage_classes():
    """Classes management page: list, create, edit and delete homeroom classes."""
    page = handle_classes_page(PageRequest.from_flask())
    return render_template('admin/manage_classes.html', page=page, section='classes')
