"""
Test suite for ilcover-compute

Contains:
- tests/unit/          : Unit tests for individual modules
"""
