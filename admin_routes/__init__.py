"""
Admin Routes Package

Administration screens, one module per managed resource.
"""

from flask import Blueprint

# Create the main admin blueprint
admin_blueprint = Blueprint('admin', __name__)

# Import all route modules to register their routes
from . import (  # noqa: E402
    classes,
    subjects,
)

admin_blueprint.register_blueprint(classes.bp, url_prefix='')
admin_blueprint.register_blueprint(subjects.bp, url_prefix='')
