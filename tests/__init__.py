"""
Test suite for archimedes-decimal

Contains:
- tests/unit/        : Unit tests for individual modules
- tests/properties/  : Property-based tests (Hypothesis) for arithmetic contracts
"""
