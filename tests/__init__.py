"""
Test suite for Vaidya.

Each test builds its own application over a temporary SQLite database.
"""
