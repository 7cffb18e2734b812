"""
Test suite for rmssd-widths

Contains:
- tests/unit/          : Unit tests for individual modules and the CLI
"""
