"""easydoc: Javadoc generation that keeps hand-written text in sync with signatures."""

__version__ = "0.1.0"

__all__ = ["__version__"]
