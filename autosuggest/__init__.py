"""
Autocomplete proxy for an OpenSearch-compatible engine.
"""

__version__ = "0.1.0"
