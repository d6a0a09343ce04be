"""
Blog Blueprint - Blog post API
Handles: Listing, published/featured listings, id and slug lookup, create, partial update, delete
"""

from flask import Blueprint

blog_bp = Blueprint('blog', __name__, url_prefix='/api/blog-posts')

from . import routes
