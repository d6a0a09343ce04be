"""
Fields Module - Explicit field mapping between wire records and table columns

Every field an entity exposes is declared once here as (wire name, column,
kind). The tables are checked against the SQLAlchemy models at import time,
so a renamed column fails loudly instead of silently dropping out of
updates. All camelCase <-> snake_case conversion happens through them.
"""

from collections import namedtuple

from models import Project, BlogPost
from .dates import utcnow, parse_datetime, format_datetime
from .errors import ValidationError
from .text import slugify, is_slug

Field = namedtuple('Field', ['wire', 'column', 'kind', 'default', 'required', 'writable'])

# Kinds: str, slug, text-list, bool, int, datetime, timestamp


def field(wire, column=None, kind='str', default='', required=False, writable=True):
    return Field(wire, column or wire, kind, default, required, writable)


def _check_value(entity, f, value):
    """Validate one wire value against its field kind and return the column value"""
    kind = f.kind
    if kind in ('str', 'slug'):
        if not isinstance(value, str):
            raise ValidationError(f"{entity} field '{f.wire}' must be a string", f.wire)
        if kind == 'slug' and not is_slug(value):
            raise ValidationError(f"{entity} field '{f.wire}' must be a lowercase hyphenated slug", f.wire)
        if f.required and not value.strip():
            raise ValidationError(f"{entity} field '{f.wire}' is required", f.wire)
        return value
    if kind == 'text-list':
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValidationError(f"{entity} field '{f.wire}' must be a list of strings", f.wire)
        return list(value)
    if kind == 'bool':
        if not isinstance(value, bool):
            raise ValidationError(f"{entity} field '{f.wire}' must be a boolean", f.wire)
        return value
    if kind == 'int':
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"{entity} field '{f.wire}' must be an integer", f.wire)
        return value
    if kind in ('datetime', 'timestamp'):
        if value is None and kind == 'datetime':
            return None
        try:
            return parse_datetime(value)
        except (TypeError, ValueError, AttributeError):
            raise ValidationError(f"{entity} field '{f.wire}' must be an ISO-8601 date", f.wire)
    raise ValueError(f'unknown field kind {kind}')


class FieldMap:
    """Mapping table for one entity, bound to its model"""

    def __init__(self, entity, model, fields, order_by):
        self.entity = entity
        self.model = model
        self.fields = tuple(fields)
        self.by_wire = {f.wire: f for f in self.fields}
        self.order_by = order_by
        self._check_against_model()

    def _check_against_model(self):
        columns = set(self.model.__table__.columns.keys())
        mapped = {f.column for f in self.fields}
        if mapped != columns:
            raise RuntimeError(
                f"{self.entity} field map out of sync with table {self.model.__tablename__}: "
                f"unmapped columns {sorted(columns - mapped)}, unknown columns {sorted(mapped - columns)}")

    def column(self, wire):
        return self.by_wire[wire].column

    def _reject_unknown(self, data):
        if not isinstance(data, dict):
            raise ValidationError(f"{self.entity} payload must be a JSON object")
        unknown = sorted(set(data) - set(self.by_wire))
        if unknown:
            raise ValidationError(f"Unknown {self.entity} field(s): {', '.join(unknown)}", unknown[0])

    def to_wire(self, row):
        """Convert a model instance into a camelCase record"""
        record = {}
        for f in self.fields:
            value = getattr(row, f.column)
            if f.kind in ('datetime', 'timestamp'):
                value = format_datetime(value)
            elif f.kind == 'text-list':
                value = list(value or [])
            record[f.wire] = value
        return record

    def for_create(self, data):
        """
        Validate a wire record for insertion

        Server-assigned timestamps in the input are ignored. Missing optional
        fields take their defaults.

        Returns:
            dict: Column name -> value
        """
        self._reject_unknown(data)
        values = {}
        for f in self.fields:
            if f.kind == 'timestamp':
                continue
            if f.wire in data and data[f.wire] is not None:
                values[f.column] = _check_value(self.entity, f, data[f.wire])
            elif f.required:
                raise ValidationError(f"{self.entity} field '{f.wire}' is required", f.wire)
            else:
                default = f.default
                values[f.column] = default() if callable(default) else default
        return values

    def for_update(self, data):
        """
        Validate a partial wire record

        Only the supplied fields are returned. Immutable fields (id,
        createdAt) are dropped rather than applied.

        Returns:
            dict: Column name -> value, possibly empty
        """
        self._reject_unknown(data)
        values = {}
        for wire, value in data.items():
            f = self.by_wire[wire]
            if not f.writable:
                continue
            if value is None and f.kind != 'datetime':
                raise ValidationError(f"{self.entity} field '{wire}' cannot be null", wire)
            values[f.column] = _check_value(self.entity, f, value)
        return values


PROJECT_FIELDS = FieldMap('Project', Project, [
    field('id', required=True, writable=False),
    field('title', required=True),
    field('description'),
    field('technologies', kind='text-list', default=list),
    field('image'),
    field('demoUrl', 'demo_url'),
    field('githubUrl', 'github_url'),
    field('featured', kind='bool', default=False),
    field('order', 'order_index', kind='int', default=0),
    field('createdAt', 'created_at', kind='timestamp', writable=False),
    field('updatedAt', 'updated_at', kind='timestamp'),
], order_by=lambda: (Project.order_index.asc(), Project.created_at.desc()))


BLOG_POST_FIELDS = FieldMap('Blog post', BlogPost, [
    field('id', required=True, writable=False),
    field('title', required=True),
    field('excerpt'),
    field('content'),
    field('image'),
    field('date', kind='datetime', default=utcnow),
    field('readTime', 'read_time'),
    field('tags', kind='text-list', default=list),
    field('featured', kind='bool', default=False),
    field('published', kind='bool', default=False),
    field('author'),
    field('slug', kind='slug', default=None),
    field('createdAt', 'created_at', kind='timestamp', writable=False),
    field('updatedAt', 'updated_at', kind='timestamp'),
], order_by=lambda: (BlogPost.date.desc().nulls_last(), BlogPost.created_at.desc()))


def blog_post_for_create(data):
    """Blog post insert values, deriving the slug from the title when absent"""
    if isinstance(data, dict) and data.get('slug') == '':
        data = {k: v for k, v in data.items() if k != 'slug'}
    values = BLOG_POST_FIELDS.for_create(data)
    if not values.get('slug'):
        values['slug'] = slugify(values['title'])
    return values


__all__ = [
    'Field',
    'FieldMap',
    'PROJECT_FIELDS',
    'BLOG_POST_FIELDS',
    'blog_post_for_create'
]
