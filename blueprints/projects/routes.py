"""
Project Routes - Project showcase API
Handles: Listing, featured listing, lookup, create, partial update, delete
"""

from flask import jsonify
from repositories import project_repository
from utils.errors import NotFound
from blueprints import json_body
from . import projects_bp


@projects_bp.route('', methods=['GET'])
def list_projects():
    """All projects in listing order"""
    return jsonify(project_repository.get_all())


@projects_bp.route('/featured', methods=['GET'])
def featured_projects():
    return jsonify(project_repository.get_featured())


@projects_bp.route('/<project_id>', methods=['GET'])
def get_project(project_id):
    project = project_repository.get_by_id(project_id)
    if project is None:
        raise NotFound('Project', project_id)
    return jsonify(project)


@projects_bp.route('', methods=['POST'])
def create_project():
    project = project_repository.create(json_body())
    return jsonify(project), 201


@projects_bp.route('/<project_id>', methods=['PUT'])
def update_project(project_id):
    """Partial update; the server stamps updatedAt"""
    project = project_repository.update(project_id, json_body(), touch=True)
    return jsonify(project)


@projects_bp.route('/<project_id>', methods=['DELETE'])
def delete_project(project_id):
    if not project_repository.delete(project_id):
        raise NotFound('Project', project_id)
    return '', 204
