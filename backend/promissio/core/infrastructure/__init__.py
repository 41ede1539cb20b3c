from .http_client import RestApiClient

__all__ = ["RestApiClient"]
