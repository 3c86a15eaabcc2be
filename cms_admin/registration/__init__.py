"""
Registration form fields.

Importing this package registers the built-in field types with
``field_factory``.
"""

from .base import AbstractField, FieldProperties
from .errors import ErrorCollection, FieldError
from .factory import FieldFactory, field_factory, register_field_type
from .fields import CheckboxField, SelectField, TextField

__all__ = [
    "AbstractField",
    "CheckboxField",
    "ErrorCollection",
    "FieldError",
    "FieldFactory",
    "FieldProperties",
    "SelectField",
    "TextField",
    "field_factory",
    "register_field_type",
]
