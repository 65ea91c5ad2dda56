"""A small build tool for Java projects driven by rrrgradle.toml."""

__version__ = "0.1.0"
__all__ = ["__version__"]