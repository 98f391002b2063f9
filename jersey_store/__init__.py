"""Soccer jersey catalog with server-rendered pages and an admin form."""

__version__ = "0.1.0"
