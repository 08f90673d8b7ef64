"""Analytics dashboard backend: product-trend and visitor summaries."""

__version__ = "1.0.0"
