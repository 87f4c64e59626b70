"""Test suite for model router."""
