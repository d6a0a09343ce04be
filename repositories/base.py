"""
Base Repository - SQL access shared by every content entity
Handles: ordered listings, lookups, inserts, partial updates, hard deletes
"""

from flask import current_app
from sqlalchemy.exc import IntegrityError
from extensions import db
from utils.dates import utcnow
from utils.errors import DuplicateKey, EmptyUpdate, NotFound, ValidationError


class BaseRepository:
    """
    Repository over one table, driven by its FieldMap

    Records going in and out are camelCase dicts; the field map is the only
    place columns are named.
    """

    fields = None
    # Column reported when the database rejects a write as a duplicate
    conflict_field = 'id'

    @property
    def model(self):
        return self.fields.model

    @property
    def entity(self):
        return self.fields.entity

    def _ordered(self):
        return self.model.query.order_by(*self.fields.order_by())

    def _records(self, query):
        return [self.fields.to_wire(row) for row in query.all()]

    def get_all(self):
        return self._records(self._ordered())

    def get_by_id(self, record_id):
        row = db.session.get(self.model, record_id)
        return self.fields.to_wire(row) if row is not None else None

    def get_featured(self):
        return self._records(self._ordered().filter(self.model.featured.is_(True)))

    def prepare_create(self, record):
        return self.fields.for_create(record)

    def check_unique(self, values, exclude_id=None):
        """Raise DuplicateKey for unique columns other than the primary key"""
        return None

    def create(self, record):
        """
        Insert a new row

        Args:
            record (dict): camelCase record including a caller-chosen id

        Returns:
            dict: Stored record with createdAt/updatedAt assigned now
        """
        values = self.prepare_create(record)
        if db.session.get(self.model, values['id']) is not None:
            raise DuplicateKey(self.entity, 'id', values['id'])
        self.check_unique(values)

        now = utcnow()
        row = self.model(created_at=now, updated_at=now, **values)
        db.session.add(row)
        self._commit(values)
        current_app.logger.info(f"Created {self.entity.lower()} {values['id']}")
        return self.fields.to_wire(row)

    def update(self, record_id, partial, touch=False):
        """
        Apply only the supplied fields to an existing row

        updatedAt is not refreshed unless `touch` is set; otherwise include it
        in `partial` to change it. The touch stamp does not count as a field.

        Raises:
            EmptyUpdate: nothing to set
            NotFound: no row with this id
            DuplicateKey: a unique column would collide
        """
        values = self.fields.for_update(partial)
        if not values:
            raise EmptyUpdate(self.entity)
        if touch:
            values['updated_at'] = utcnow()

        existing = db.session.get(self.model, record_id)
        if existing is None:
            raise NotFound(self.entity, record_id)
        updated_at = values.get('updated_at')
        if updated_at is not None and updated_at < existing.created_at:
            raise ValidationError(f"{self.entity} updatedAt cannot precede createdAt", 'updatedAt')
        self.check_unique(values, exclude_id=record_id)

        count = self.model.query.filter_by(id=record_id).update(values, synchronize_session=False)
        if not count:
            db.session.rollback()
            raise NotFound(self.entity, record_id)
        self._commit(values)
        current_app.logger.info(f"Updated {self.entity.lower()} {record_id}: {', '.join(sorted(values))}")
        return self.get_by_id(record_id)

    def delete(self, record_id):
        """Hard delete; returns False when no row matched"""
        count = self.model.query.filter_by(id=record_id).delete()
        db.session.commit()
        if count:
            current_app.logger.info(f"Deleted {self.entity.lower()} {record_id}")
        return count > 0

    def _commit(self, values):
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            current_app.logger.warning(f"Integrity error writing {self.entity.lower()}: {str(e.orig)}")
            raise DuplicateKey(self.entity, self.conflict_field,
                               values.get(self.conflict_field, values.get('id')))
