"""
Test Suite for Budget Buddy

Test Structure:
- fixtures/: Shared test doubles (fault-injecting store)
- unit/: Unit tests mirroring src/ package structure
- integration/: Configuration, CLI and end-to-end workflow tests

Test Categories:
- Core utilities (money, currency, dates, errors, stores, auth)
- Households, categories and expenses
- Allocation strategies, progress and budget lifecycle

All tests run against in-memory or temporary-directory stores.
"""
