"""mdexec - run the shell blocks of a markdown file."""

__version__ = "0.1.0"

__all__ = ["__version__"]
