"""Test suite for the gallery access layer."""
