"""
mediafetch: a resilient retrieval engine for throttled media origins.
"""

__version__ = "1.0.0"
