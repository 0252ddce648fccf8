"""
Test suite for dp_core

Contains:
- tests/unit/          : Unit tests for individual modules
"""
