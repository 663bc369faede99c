"""jooq-build — jOOQ source generation wired into an incremental build graph."""

__version__ = "0.1.0"
