"""Bundled parse-tree and canonical-format dumpers.

Each module is a small program run as an external tool
(``python -m sdt.dumpers.<name> FILE``): it prints a dump of FILE on stdout
and exits non-zero with a message on stderr when it cannot.
"""
