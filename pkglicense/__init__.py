"""pkglicense - recursive package license checker.

Finds every package.json below a project root, collects the licenses of
each package's dependencies, validates them against an allow-list and
keeps a JSON snapshot of the result for CI comparison.
"""

__version__ = "0.1.0"
