"""componentsmith: prompt/XML to React component generation toolkit."""

__version__ = "0.1.0"
