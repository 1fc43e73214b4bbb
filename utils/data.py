"""
Data Module - Generic table client over the SQLAlchemy models
Every page and admin tab reads and writes rows through table(name),
a small query builder whose execute() returns Result(data, error)
instead of raising.
"""

from collections import namedtuple
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from models import TABLES


class DataError(Exception):
    """Backend failure surfaced to the user verbatim"""

    def __init__(self, message, table=None):
        super().__init__(message)
        self.message = message
        self.table = table


class UnknownTableError(KeyError):
    pass


class Result(namedtuple('Result', ['data', 'error'])):
    __slots__ = ()

    @property
    def ok(self):
        return self.error is None


def row_to_dict(row):
    """Convert a model instance to a plain dict of its columns"""
    return {column.name: getattr(row, column.name) for column in row.__table__.columns}


class TableQuery:
    """Chainable request against one table, run with execute()"""

    def __init__(self, name, model):
        self.name = name
        self.model = model
        self._operation = 'select'
        self._values = None
        self._on_conflict = None
        self._filters = []
        self._ordering = []
        self._limit = None
        self._cardinality = None  # None, 'single' or 'maybe_single'

    # Operations

    def select(self):
        self._operation = 'select'
        return self

    def insert(self, values):
        self._operation = 'insert'
        self._values = values
        return self

    def update(self, values):
        self._operation = 'update'
        self._values = values
        return self

    def delete(self):
        self._operation = 'delete'
        return self

    def upsert(self, values, on_conflict='id'):
        self._operation = 'upsert'
        self._values = values
        self._on_conflict = on_conflict
        return self

    # Modifiers

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self._ordering.append((column, desc))
        return self

    def limit(self, count):
        self._limit = count
        return self

    def single(self):
        self._cardinality = 'single'
        return self

    def maybe_single(self):
        self._cardinality = 'maybe_single'
        return self

    # Execution

    def execute(self):
        """Run the request; failures are rolled back and returned as Result.error"""
        handler = getattr(self, f'_run_{self._operation}')
        try:
            return Result(handler(), None)
        except DataError as e:
            db.session.rollback()
            current_app.logger.warning(f"Request on {self.name} rejected: {e.message}")
            return Result(None, e)
        except SQLAlchemyError as e:
            db.session.rollback()
            message = str(getattr(e, 'orig', None) or e)
            current_app.logger.error(f"Database error on {self.name}: {message}")
            return Result(None, DataError(message, table=self.name))

    def _column(self, name):
        column = self.model.__table__.columns.get(name)
        if column is None:
            raise DataError(f'column "{name}" of table "{self.name}" does not exist', table=self.name)
        return getattr(self.model, name)

    def _check_values(self, values):
        for key in values:
            self._column(key)
        return values

    def _rows_list(self):
        values = self._values
        if isinstance(values, dict):
            values = [values]
        if not values:
            raise DataError(f'no values given for {self._operation} on "{self.name}"', table=self.name)
        return [self._check_values(dict(v)) for v in values]

    def _filtered(self):
        query = self.model.query
        for column, value in self._filters:
            query = query.filter(self._column(column) == value)
        return query

    def _require_filter(self):
        if not self._filters:
            raise DataError(f'{self._operation} on "{self.name}" requires a filter', table=self.name)

    def _run_select(self):
        query = self._filtered()
        for column, desc in self._ordering:
            attr = self._column(column)
            query = query.order_by(attr.desc() if desc else attr.asc())
        if self._limit is not None:
            query = query.limit(self._limit)
        rows = [row_to_dict(r) for r in query.all()]

        if self._cardinality is None:
            return rows
        if len(rows) > 1 or (not rows and self._cardinality == 'single'):
            raise DataError(
                f'JSON object requested, {len(rows)} rows returned from "{self.name}"',
                table=self.name)
        return rows[0] if rows else None

    def _run_insert(self):
        rows = [self.model(**values) for values in self._rows_list()]
        db.session.add_all(rows)
        db.session.commit()
        return [row_to_dict(r) for r in rows]

    def _run_update(self):
        self._require_filter()
        values = self._check_values(dict(self._values or {}))
        rows = self._filtered().all()
        for row in rows:
            for key, value in values.items():
                setattr(row, key, value)
        db.session.commit()
        return [row_to_dict(r) for r in rows]

    def _run_delete(self):
        self._require_filter()
        rows = self._filtered().all()
        deleted = [row_to_dict(r) for r in rows]
        for row in rows:
            db.session.delete(row)
        db.session.commit()
        return deleted

    def _run_upsert(self):
        conflict = self._column(self._on_conflict)
        rows = []
        for values in self._rows_list():
            key = values.get(self._on_conflict)
            row = self.model.query.filter(conflict == key).first() if key is not None else None
            if row is None:
                row = self.model(**values)
                db.session.add(row)
            else:
                for name, value in values.items():
                    setattr(row, name, value)
            rows.append(row)
        db.session.commit()
        return [row_to_dict(r) for r in rows]


def table(name):
    """
    Start a request against a named table

    Args:
        name (str): One of profiles, projects, contact_info, about_content,
            home_content, hero_stats, resume, user_roles

    Returns:
        TableQuery: builder, run with .execute()
    """
    try:
        model = TABLES[name]
    except KeyError:
        raise UnknownTableError(name) from None
    return TableQuery(name, model)


__all__ = [
    'DataError',
    'UnknownTableError',
    'Result',
    'TableQuery',
    'row_to_dict',
    'table'
]
