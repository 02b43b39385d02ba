"""Handler packages used by the tests."""
