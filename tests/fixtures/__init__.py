"""Shared pytest fixtures for the Bindery test suite."""
