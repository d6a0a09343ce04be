from utils.fields import PROJECT_FIELDS
from .base import BaseRepository


class ProjectRepository(BaseRepository):
    """Projects, listed by order_index then newest first"""

    fields = PROJECT_FIELDS
