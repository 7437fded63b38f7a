"""casefile: declarative YAML test descriptions for Python functions and classes.

Document sources describe suites and cases; casefile resolves them
(includes, mocks, dot-paths) and runs them against the module under test,
either standalone through the `casefile` command or as pytest items.
"""

__version__ = "0.3.0"
