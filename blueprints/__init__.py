"""
Blueprints Package - Modular application structure
Each blueprint handles one content resource of the REST API
"""

from flask import request

from utils.errors import ValidationError

__all__ = ['projects', 'blog', 'json_body']


def json_body():
    """Decoded JSON object from the current request, or ValidationError"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data
