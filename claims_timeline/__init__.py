"""Medical claims JSON to timeline normalizer and HTML renderer."""

__version__ = "0.1.0"
