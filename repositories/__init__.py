"""
Repositories Package - SQL access layer for portfolio content
"""

from .projects import ProjectRepository
from .blog_posts import BlogPostRepository

project_repository = ProjectRepository()
blog_post_repository = BlogPostRepository()

__all__ = ['ProjectRepository', 'BlogPostRepository', 'project_repository', 'blog_post_repository']
