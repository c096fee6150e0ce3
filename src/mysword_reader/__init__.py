"""MySword Reader - turn MySword module files into clean, structured text."""

__version__ = "0.1.0"
