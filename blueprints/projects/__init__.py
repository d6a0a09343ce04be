"""
Projects Blueprint - Project showcase API
Handles: Listing, featured listing, lookup, create, partial update, delete
"""

from flask import Blueprint

projects_bp = Blueprint('projects', __name__, url_prefix='/api/projects')

from . import routes
