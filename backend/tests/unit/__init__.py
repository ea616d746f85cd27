"""
Unit Tests

Unit tests run in isolation without external dependencies.
Redis is mocked; time is pinned with a frozen clock.
"""
