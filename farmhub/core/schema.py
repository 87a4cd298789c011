"""
Entity kinds, their tables, declared joins and validation schemas.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from django.utils.module_loading import import_string


@dataclass(frozen=True)
class Join:
    """A related row embedded into each row of a table at read time.

    `alias` is the key the embedded values land under, `column` the foreign
    key column on the owning table, `table` the referenced table and `fields`
    the referenced columns to fetch.
    """
    alias: str
    column: str
    table: str
    fields: tuple


@dataclass(frozen=True)
class Relation:
    """A resolved join: the referenced row id plus the fetched columns."""
    id: str
    values: dict

    def get(self, key, default=None):
        return self.values.get(key, default)

    def __getitem__(self, key):
        return self.values[key]

    def as_dict(self):
        return {'id': self.id, **self.values}


@dataclass(frozen=True)
class EntityKind:
    name: str
    label: str
    form: str
    joins: tuple = field(default_factory=tuple)

    @property
    def table(self):
        return self.name

    @property
    def form_class(self):
        return import_string(self.form)


PROFILES_TABLE = 'profiles'

ENTITY_KINDS = (
    EntityKind('fields', 'field', 'farmhub.fields.serializers.FieldFormSerializer'),
    EntityKind('crops', 'crop', 'farmhub.fields.serializers.CropFormSerializer', joins=(
        Join('field', 'field_id', 'fields', ('name',)),
    )),
    EntityKind('livestock', 'animal', 'farmhub.livestock.serializers.LivestockFormSerializer'),
    EntityKind('inputs', 'input', 'farmhub.inventory.serializers.InputFormSerializer'),
    EntityKind('products', 'product', 'farmhub.inventory.serializers.ProductFormSerializer'),
    EntityKind('harvests', 'harvest', 'farmhub.inventory.serializers.HarvestFormSerializer', joins=(
        Join('crop', 'crop_id', 'crops', ('name',)),
        Join('field', 'field_id', 'fields', ('name',)),
        Join('harvested_by_profile', 'harvested_by', PROFILES_TABLE, ('full_name',)),
    )),
    EntityKind('customers', 'customer', 'farmhub.parties.serializers.CustomerFormSerializer'),
    EntityKind('tasks', 'task', 'farmhub.tasks.serializers.TaskFormSerializer', joins=(
        Join('assigned_to_profile', 'assigned_to', PROFILES_TABLE, ('full_name',)),
        Join('assigned_by_profile', 'assigned_by', PROFILES_TABLE, ('full_name',)),
    )),
    EntityKind('sales', 'sale', 'farmhub.sales.serializers.SaleFormSerializer', joins=(
        Join('product', 'product_id', 'products', ('name', 'unit')),
        Join('customer', 'customer_id', 'customers', ('name',)),
    )),
)

_BY_NAME = {kind.name: kind for kind in ENTITY_KINDS}


def get_entity(name):
    """Look up an entity kind by table name; KeyError when unknown."""
    return _BY_NAME[name]


def is_entity(name):
    return name in _BY_NAME


def jsonable(value):
    """Convert a Python value to its JSON wire form."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Relation):
        return value.as_dict()
    if isinstance(value, dict):
        return {key: jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [jsonable(item) for item in value]
    return value


def resolve_relations(row, joins):
    """Replace embedded join payloads with Relation objects (or None).

    A join whose referenced row is gone, or whose foreign key is empty,
    resolves to None.
    """
    resolved = dict(row)
    for join in joins:
        embedded = resolved.get(join.alias)
        ref_id = resolved.get(join.column)
        if isinstance(embedded, Relation):
            continue
        if embedded and ref_id is not None:
            resolved[join.alias] = Relation(id=str(ref_id), values=dict(embedded))
        else:
            resolved[join.alias] = None
    return resolved
