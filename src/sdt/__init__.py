"""sdt - Semantic Diff Tool.

Shows only the source hunks whose change is visible in the parse tree (or
canonical rendering) of a file, hiding purely stylistic edits.
"""

__version__ = "0.9.0"
