"""Test data factories."""
