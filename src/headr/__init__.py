"""headr — print the first lines or bytes of files."""

__version__ = "0.1.0"
