"""
Test suites package.

Kept importable so that `run_tests.py --suite cases` and the unit tests can
reach the UI framework and page objects without going through pytest.

Credentials are never stored here; they come from the environment (.env).
"""
