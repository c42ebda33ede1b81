"""Integration tests for the forest plot generator.

These tests drive the CLI and the web API end to end with small CSV
files written to temporary directories.
"""
