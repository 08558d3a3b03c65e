"""HTTP backend for creating and running drafts."""

__version__ = "0.1.0"
