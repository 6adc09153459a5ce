"""
Test Fixtures and Utilities

Shared test helpers that don't fit as pytest fixtures.

This module provides:
- FailingStore: an in-memory store that fails on a chosen write
"""
