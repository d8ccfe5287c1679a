"""
Test suite for the Ledger Import Engine.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_ledger_importers.py -v
"""
