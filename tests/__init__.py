"""Test suite for gentag.

This package contains test modules and fixtures for verifying the functionality
of the gentag tool. It includes tests for:
- Tag pattern matching and version scheme detection
- Version increments and tag sequencing
- Configuration layering
- Git operations on real temporary repositories
- The command line

The test suite uses pytest and provides fixtures for common test scenarios.
"""
