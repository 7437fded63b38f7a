"""Test suite for the casefile test runner.

Organized into three categories:

1. core/: Unit tests for core resolution and execution logic
   - No filesystem or import-system access
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for adapter implementations
   - Real files in temporary directories
   - YAML includes, discovery, module import, reporting, CLI, pytest plugin

3. fakes/: Port implementations for testing
"""
