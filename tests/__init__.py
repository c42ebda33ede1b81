"""Test suite for the forest plot generator.

This package contains unit tests for the weighting, tick and layout
computations and integration tests for the CLI and web API. To run the
tests, execute `pytest` from the project root.
"""
