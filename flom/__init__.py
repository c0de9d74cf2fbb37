"""flom - resolve music links across streaming platforms."""

__version__ = "0.1.0"
