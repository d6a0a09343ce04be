"""
Blog Routes - Blog post API
Handles: Listing, published/featured listings, id and slug lookup, create, partial update, delete
"""

from flask import jsonify
from repositories import blog_post_repository
from utils.errors import NotFound
from blueprints import json_body
from . import blog_bp


@blog_bp.route('', methods=['GET'])
def list_blog_posts():
    """All posts, drafts included, newest publication date first"""
    return jsonify(blog_post_repository.get_all())


@blog_bp.route('/published', methods=['GET'])
def published_blog_posts():
    return jsonify(blog_post_repository.get_published())


@blog_bp.route('/featured', methods=['GET'])
def featured_blog_posts():
    """Featured posts that are also published"""
    return jsonify(blog_post_repository.get_featured())


@blog_bp.route('/<post_id>', methods=['GET'])
def get_blog_post(post_id):
    post = blog_post_repository.get_by_id(post_id)
    if post is None:
        raise NotFound('Blog post', post_id)
    return jsonify(post)


@blog_bp.route('/slug/<slug>', methods=['GET'])
def get_blog_post_by_slug(slug):
    post = blog_post_repository.get_by_slug(slug)
    if post is None:
        raise NotFound('Blog post', slug)
    return jsonify(post)


@blog_bp.route('', methods=['POST'])
def create_blog_post():
    post = blog_post_repository.create(json_body())
    return jsonify(post), 201


@blog_bp.route('/<post_id>', methods=['PUT'])
def update_blog_post(post_id):
    post = blog_post_repository.update(post_id, json_body(), touch=True)
    return jsonify(post)


@blog_bp.route('/<post_id>', methods=['DELETE'])
def delete_blog_post(post_id):
    if not blog_post_repository.delete(post_id):
        raise NotFound('Blog post', post_id)
    return '', 204
