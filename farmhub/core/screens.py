"""
Helpers shared by the per-app screen functions.
"""
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from farmhub.core.schema import jsonable


@dataclass
class ScreenContext:
    """Everything a screen function may read."""
    profile: object
    store: object
    params: dict = field(default_factory=dict)
    can_modify: bool = False

    @property
    def role(self):
        return self.profile.role if self.profile else None

    def param(self, name, default=None):
        value = self.params.get(name)
        return default if value in (None, '') else value


def column(key, label):
    return {'key': key, 'label': label}


def number(value):
    """Numeric column value as float, 0 when missing."""
    if value in (None, ''):
        return 0.0
    return float(value)


def as_date(value):
    """Parse an ISO date or datetime string (or pass a date through)."""
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return timezone.localtime(value).date() if timezone.is_aware(value) else value.date()
    if isinstance(value, date):
        return value
    parsed = parse_datetime(value) if 'T' in value or ' ' in value else None
    if parsed is not None:
        return as_date(parsed)
    return parse_date(value[:10])


def today():
    return timezone.localdate()


def days_ago(days):
    return today() - timedelta(days=days)


def on_or_after(value, since):
    parsed = as_date(value)
    return parsed is not None and parsed >= since


def relation_value(row, alias, key, placeholder):
    """Value from a resolved join, or the placeholder when the relation is missing."""
    relation = row.get(alias)
    if relation is None:
        return placeholder
    return relation.get(key) or placeholder


def count_by(rows, key):
    return dict(Counter(row.get(key) for row in rows if row.get(key)))


def render_rows(rows, extra=None):
    """JSON-ready rows, optionally merged with computed display columns."""
    rendered = []
    for row in rows:
        item = jsonable(row)
        if extra:
            item.update(extra(row))
        rendered.append(item)
    return rendered


def money(value):
    return round(number(value), 2)
