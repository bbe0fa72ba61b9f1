"""
app/validators package marker.
"""

from app.validators.import_validator import ImportPayloadValidator

__all__ = ["ImportPayloadValidator"]
