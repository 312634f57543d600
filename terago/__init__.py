"""Generate technology radar HTML pages from dated YAML snapshots."""

__version__ = "0.2.0"