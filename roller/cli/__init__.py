"""roller command-line interface."""
