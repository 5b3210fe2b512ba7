"""
WSGI entry point for the school administration application.
This file is used by Gunicorn and other WSGI servers to run the application.
"""

from app import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=app.config.get('DEBUG', False))
