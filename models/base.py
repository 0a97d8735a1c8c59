"""
Database Base Module

The shared Flask-SQLAlchemy instance. Kept apart from app.py so that
models and services can import it without importing the application.
"""

from flask_sqlalchemy import SQLAlchemy

# Bound to the Flask app with db.init_app(app) in app.py
db = SQLAlchemy()
