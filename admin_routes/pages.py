"""
Shared request handling for the administration pages.

A page handler receives a ``PageRequest`` built once from the incoming Flask
request, and returns a ``PageState`` that the template renders. Handlers do
not read ``flask.request`` or ``current_user`` themselves.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from flask import current_app, request
from flask_login import current_user
from flask_wtf.csrf import generate_csrf, validate_csrf
from wtforms import ValidationError

from models import MAX_ID
from services import log_activity
from . import messages

STATUS_SUCCESS = 'success'
STATUS_ERROR = 'error'


class Action(Enum):
    """Mutations a page can perform; the form flag is ``<action>_<resource>``."""
    CREATE = 'create'
    UPDATE = 'update'
    DELETE = 'delete'

    def form_key(self, resource):
        return f'{self.value}_{resource}'


def decode_action(form, resource):
    """
    Return the single ``Action`` flagged in ``form`` for ``resource``.

    ``None`` when no action flag or more than one is present.
    """
    present = [action for action in Action if action.form_key(resource) in form]
    if len(present) != 1:
        return None
    return present[0]


def parse_positive_int(value):
    """Parse ``value`` as a plain decimal id between 1 and ``MAX_ID``, or return ``None``."""
    if value is None:
        return None
    text = str(value).strip()
    if not (text.isascii() and text.isdigit()):
        return None
    number = int(text)
    return number if 0 < number <= MAX_ID else None


def clean_text(value):
    return str(value or '').strip()


@dataclass(frozen=True)
class PageRequest:
    method: str
    form: Mapping[str, str] = field(default_factory=dict)
    args: Mapping[str, str] = field(default_factory=dict)
    user_id: Optional[int] = None
    remote_addr: Optional[str] = None
    user_agent: Optional[str] = None

    @property
    def is_post(self):
        return self.method.upper() == 'POST'

    @classmethod
    def from_flask(cls):
        """Capture the current Flask request and logged-in user."""
        return cls(
            method=request.method,
            form=request.form.to_dict(),
            args=request.args.to_dict(),
            user_id=current_user.id if current_user.is_authenticated else None,
            remote_addr=request.remote_addr,
            user_agent=request.headers.get('User-Agent'),
        )


@dataclass
class PageState:
    """Everything a management template needs for one render."""
    items: List[Dict[str, Any]] = field(default_factory=list)
    teachers: List[Dict[str, Any]] = field(default_factory=list)
    details: Optional[Dict[str, Any]] = None
    message: str = ''
    message_type: Optional[str] = None
    csrf_token: str = ''

    def success(self, message):
        self.message = message
        self.message_type = STATUS_SUCCESS

    def error(self, message):
        self.message = message
        self.message_type = STATUS_ERROR

    @property
    def is_error(self):
        return self.message_type == STATUS_ERROR


def check_csrf(page_request):
    """Validate the posted token against the session; log and return False on mismatch."""
    try:
        validate_csrf(page_request.form.get('csrf_token'))
    except ValidationError as e:
        current_app.logger.warning(
            f"CSRF token validation failed for user ID: {page_request.user_id or 'Unknown'} "
            f"from {page_request.remote_addr or 'unknown address'} ({e})"
        )
        return False
    return True


def issue_csrf_token(state):
    """Attach a token for the next submission; on failure leave it empty and show an error."""
    try:
        state.csrf_token = generate_csrf()
    except RuntimeError as e:
        current_app.logger.error(f"CSRF token generation failed: {str(e)}")
        state.csrf_token = ''
        state.error(messages.CSRF_GENERATION_FAILED)


def audit(page_request, action, details, success, error_message=None):
    log_activity(
        user_id=page_request.user_id,
        action=action,
        details=details,
        ip_address=page_request.remote_addr,
        user_agent=page_request.user_agent,
        success=success,
        error_message=None if success else error_message,
    )


def run_page(page_request, state, resource, handlers):
    """
    Validate the token and dispatch a POST to ``handlers[Action]``.

    Each handler is called as ``handler(page_request, state)`` and records its
    outcome on ``state``.
    """
    if not check_csrf(page_request):
        state.error(messages.CSRF_INVALID)
        return

    action = decode_action(page_request.form, resource)
    if action is None:
        current_app.logger.info(f"Rejected {resource} form without a single action flag")
        state.error(messages.UNKNOWN_ACTION)
        return

    handlers[action](page_request, state)
