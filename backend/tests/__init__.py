"""
Flashdeck Test Suite

Test Structure:
    tests/
    ├── conftest.py          # Shared fixtures and configuration
    └── unit/                # Unit tests (isolated, no external dependencies)
        ├── test_config.py   # Configuration loading tests
        ├── test_redis.py    # Learner data storage tests (mocked Redis)
        └── test_*.py        # Scheduling, session, store and analytics tests

Running Tests:
    # Run all tests
    pytest backend/tests/ -v

    # Run with coverage
    pytest backend/tests/ --cov=flashdeck --cov-report=html
"""
