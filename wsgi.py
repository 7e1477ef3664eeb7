"""WSGI entry point, e.g. ``gunicorn wsgi:application``."""

from congregation.web import flask_app

application = flask_app

if __name__ == "__main__":
    application.run()
