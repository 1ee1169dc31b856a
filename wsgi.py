#!/usr/bin/env python3
"""
WSGI entry point for production deployment
"""
from ruscles import create_app, db
import ruscles.models  # noqa: F401

# Create the Flask application
application = create_app()

# Initialize database tables
with application.app_context():
    db.create_all()

if __name__ == "__main__":
    application.run()
