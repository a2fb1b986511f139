"""
Tests Package - Unit Tests

Test structure:
- tests/conftest.py - shared fixtures (sample feeds, mock HTTP transport)
- tests/test_*.py - one module per component

All tests are offline: HTTP goes through httpx.MockTransport.
"""
