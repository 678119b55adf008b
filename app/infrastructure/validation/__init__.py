"""
Request validation package.
"""

from .validators import FieldRules, TaskValidator, ensure_valid, field_root, validate_well_formed

__all__ = [
    'FieldRules',
    'TaskValidator',
    'ensure_valid',
    'field_root',
    'validate_well_formed',
]
