"""
Domain exceptions for the prediction system.
"""

class PhoenixException(Exception):
    """Base exception for prediction-related errors."""
    pass

class DataSourceException(PhoenixException):
    """Base exception for upstream data source failures."""
    pass

class UpstreamFetchError(DataSourceException):
    """Exception raised when the upstream provider returns a non-2xx status, an API error or is unreachable."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code

class DataSourceNotConfiguredError(DataSourceException):
    """Exception raised when a data source is used without an API key."""
    pass
