"""
Errors Module - Exception taxonomy shared by the API server and the client
"""


class ConfigurationError(Exception):
    """Required settings are missing or unusable"""

    def __init__(self, message, missing=None):
        super().__init__(message)
        self.missing = list(missing or [])


class NotFound(Exception):
    """Single-entity lookup found nothing"""

    def __init__(self, entity, key):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.key = key


class DuplicateKey(Exception):
    """Unique constraint (id or slug) would be violated"""

    def __init__(self, entity, field, value):
        super().__init__(f"{entity} with {field} '{value}' already exists")
        self.entity = entity
        self.field = field
        self.value = value


class EmptyUpdate(Exception):
    """Partial update carried no fields to set"""

    def __init__(self, entity):
        super().__init__(f"No fields to update for {entity}")
        self.entity = entity


class ValidationError(Exception):
    """Field missing or malformed on create/update"""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class ApiError(Exception):
    """Failure talking to the REST API, carries the HTTP status"""

    def __init__(self, message, status):
        super().__init__(message)
        self.status = status


class TransportError(ApiError):
    """Network failure, timeout or unreadable response (status 0)"""

    def __init__(self, message='Network error or API unavailable'):
        super().__init__(message, 0)


class RemoteError(ApiError):
    """Non-2xx response from the API"""

    def __init__(self, status, message=None):
        super().__init__(message or f"API request failed with status {status}", status)


class ServiceError(Exception):
    """A write did not take effect"""


__all__ = [
    'ConfigurationError',
    'NotFound',
    'DuplicateKey',
    'EmptyUpdate',
    'ValidationError',
    'ApiError',
    'TransportError',
    'RemoteError',
    'ServiceError'
]
