"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.military import Military  # noqa: F401
from app.models.process import Process, ProcessAssignment  # noqa: F401
