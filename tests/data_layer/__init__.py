"""
Data Layer Testing Suite

Tests for the user_info and movies table models.

Test Categories:
- Unit: statement shape, bound arguments and error classification against a mocked pool
- Integration: round trips against a real Postgres (requires TEST_DATABASE_URL)
"""
