"""
Utils Package - Shared helpers for the API server and the client

`utils.fields` is imported directly where needed, it depends on the models.
"""

from .errors import (
    ConfigurationError,
    NotFound,
    DuplicateKey,
    EmptyUpdate,
    ValidationError,
    ApiError,
    TransportError,
    RemoteError,
    ServiceError
)
from .dates import utcnow, parse_datetime, format_datetime
from .text import slugify, is_slug, unique_sorted

__all__ = [
    # Errors
    'ConfigurationError',
    'NotFound',
    'DuplicateKey',
    'EmptyUpdate',
    'ValidationError',
    'ApiError',
    'TransportError',
    'RemoteError',
    'ServiceError',

    # Dates
    'utcnow',
    'parse_datetime',
    'format_datetime',

    # Text
    'slugify',
    'is_slug',
    'unique_sorted'
]
