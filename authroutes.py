# Core Flask imports
from flask import Blueprint, render_template, redirect, url_for, flash, request, current_app
from flask_login import login_user, logout_user, login_required, current_user

# Database and model imports
from extensions import csrf
from models import User

# Application imports
from services import log_activity

# Werkzeug utilities
from werkzeug.security import check_password_hash

auth_blueprint = Blueprint('auth', __name__)


@auth_blueprint.route('/login', methods=['GET', 'POST'])
def login():
    if current_user.is_authenticated:
        return redirect(url_for('home'))

    if request.method == 'POST':
        # Raises CSRFError, handled at application level
        csrf.protect()

        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')

        if not username or not password:
            flash('Uporabniško ime in geslo sta obvezna.', 'danger')
            return render_template('auth/login.html'), 400

        user = User.query.filter_by(username=username).first()
        if user and check_password_hash(user.password_hash, password):
            login_user(user)
            log_activity(
                user_id=user.id,
                action='login',
                details={'role': user.role},
                ip_address=request.remote_addr,
                user_agent=request.headers.get('User-Agent')
            )
            current_app.logger.info(f"User {user.id} logged in")
            return redirect(url_for('home'))

        log_activity(
            user_id=user.id if user else None,
            action='login_failed',
            details={'username': username},
            ip_address=request.remote_addr,
            user_agent=request.headers.get('User-Agent'),
            success=False,
            error_message='Invalid credentials'
        )
        current_app.logger.warning(f"Failed login for username '{username}' from {request.remote_addr}")
        flash('Napačno uporabniško ime ali geslo.', 'danger')
        return render_template('auth/login.html'), 401

    return render_template('auth/login.html')


@auth_blueprint.route('/logout')
@login_required
def logout():
    log_activity(
        user_id=current_user.id,
        action='logout',
        ip_address=request.remote_addr,
        user_agent=request.headers.get('User-Agent')
    )
    logout_user()
    flash('Uspešno ste se odjavili.', 'info')
    return redirect(url_for('auth.login'))
