"""Structural checks for decoded Build map files."""

from .structure import StructuralViolation, validate_structure, validate_structure_file

__all__ = ["StructuralViolation", "validate_structure", "validate_structure_file"]
