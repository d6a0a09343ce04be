from extensions import db
from sqlalchemy import JSON
from utils.dates import utcnow


# String list stored as TEXT[] on PostgreSQL and as JSON on SQLite
class SafeTextList(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import ARRAY
            return dialect.type_descriptor(ARRAY(db.Text))
        else:
            return dialect.type_descriptor(JSON())

    def process_result_value(self, value, dialect):
        return list(value) if value is not None else []


class Project(db.Model):
    __tablename__ = 'projects'
    id = db.Column(db.String(255), primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, default='')
    technologies = db.Column(SafeTextList, default=list)
    image = db.Column(db.String(500), default='')
    demo_url = db.Column(db.String(500), default='')
    github_url = db.Column(db.String(500), default='')
    featured = db.Column(db.Boolean, default=False, nullable=False)
    order_index = db.Column(db.Integer, default=0, nullable=False)
    # updated_at is supplied by the caller on update, never refreshed here
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        db.Index('idx_projects_featured', 'featured'),
        db.Index('idx_projects_order', 'order_index'),
    )

    def __repr__(self):
        return f'<Project {self.id}>'


class BlogPost(db.Model):
    __tablename__ = 'blog_posts'
    id = db.Column(db.String(255), primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    excerpt = db.Column(db.Text, default='')
    content = db.Column(db.Text, default='')
    image = db.Column(db.String(500), default='')
    date = db.Column(db.DateTime)
    read_time = db.Column(db.String(50), default='')
    tags = db.Column(SafeTextList, default=list)
    featured = db.Column(db.Boolean, default=False, nullable=False)
    published = db.Column(db.Boolean, default=False, nullable=False)
    author = db.Column(db.String(255), default='')
    slug = db.Column(db.String(255), unique=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        db.Index('idx_blog_posts_published', 'published'),
        db.Index('idx_blog_posts_featured', 'featured'),
        db.Index('idx_blog_posts_date', 'date'),
    )

    def __repr__(self):
        return f'<BlogPost {self.slug}>'
