"""Integration tests for adapter implementations.

These tests exercise adapters against real files in temporary
directories to validate parsing, include resolution, discovery,
module import and output formatting.
"""
