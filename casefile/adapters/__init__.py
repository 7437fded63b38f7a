"""External adapters for the casefile test runner.

This package contains everything that touches the outside world and
provides implementations of the core port interfaces.

Adapter Organization:

- source/: Document sources (YAML with `!include`)
- discovery/: Locating document sources on disk
- loader/: Importing the module under test
- reporting/: Presenting results (stdout)
- cli/: Command-line command handlers
"""
