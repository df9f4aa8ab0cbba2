"""
Core math primitives, domain models, and contracts.

This package contains the matrix engine itself plus the snapshot model and
JSON contract used to move matrices across process boundaries.
"""
