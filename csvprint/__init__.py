"""Turn a CSV upload into a paginated, print-ready HTML document."""

__version__ = "0.1.0"
