"""Command line tools for provcheck."""
