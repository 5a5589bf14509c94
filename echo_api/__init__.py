"""
Echo API - JSON echo service with structured request/response logging.
"""

__version__ = "1.0.0"
