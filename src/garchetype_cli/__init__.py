"""garchetype command-line interface."""
