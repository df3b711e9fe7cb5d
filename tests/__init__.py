"""
Unit Tests for engine_link

This package contains unit tests for all engine_link components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_sync.py

    # Run with coverage
    pytest tests/ --cov=engine_link --cov-report=html

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting

test_channel.py starts real subprocesses (a fake engine run by the current
Python interpreter); everything else runs in memory.
"""
