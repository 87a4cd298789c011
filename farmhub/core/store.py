"""
Data store: the local copy of every entity collection.

Collections are filled by load_all() and kept in step with the backend by
add/update/delete, which change local state only after the backend call
succeeded.
"""
import logging
from concurrent.futures import ThreadPoolExecutor

from farmhub.core.exceptions import BackendError, RowNotFound
from farmhub.core.schema import ENTITY_KINDS, get_entity, resolve_relations

logger = logging.getLogger('farmhub.core.store')


class DataStore:

    def __init__(self, backend):
        self.backend = backend
        self._collections = {kind.name: [] for kind in ENTITY_KINDS}
        self.loaded = False

    def __getattr__(self, name):
        # store.fields, store.crops, ...
        collections = self.__dict__.get('_collections')
        if collections is not None and name in collections:
            return collections[name]
        raise AttributeError(f"{type(self).__name__!s} has no attribute '{name}'")

    def collection(self, kind):
        return self._collections[get_entity(kind).name]

    def _fetch(self, kind):
        entity = get_entity(kind)
        rows = self.backend.select(entity.table, entity.joins)
        return [resolve_relations(row, entity.joins) for row in rows]

    def load(self, kind):
        """Reload a single collection from the backend."""
        rows = self._fetch(kind)
        self._collections[kind] = rows
        logger.debug(f"Loaded {len(rows)} {kind}")
        return rows

    def load_all(self):
        """Reload every collection; the first failure is re-raised after all reads finish."""
        names = [kind.name for kind in ENTITY_KINDS]
        results = {}
        errors = []

        def fetch(name):
            try:
                results[name] = self._fetch(name)
            except BackendError as e:
                logger.error(f"Error loading {name}: {e.message}", exc_info=True)
                errors.append(e)

        if getattr(self.backend, 'supports_concurrent_reads', False):
            with ThreadPoolExecutor(max_workers=len(names)) as executor:
                list(executor.map(fetch, names))
        else:
            for name in names:
                fetch(name)

        self._collections.update(results)
        self.loaded = not errors
        if errors:
            raise errors[0]
        logger.debug(f"Loaded all collections ({sum(len(rows) for rows in results.values())} rows)")
        return self

    refresh = load_all

    def get(self, kind, row_id):
        for row in self.collection(kind):
            if str(row['id']) == str(row_id):
                return row
        return None

    def add(self, kind, data):
        entity = get_entity(kind)
        row = resolve_relations(self.backend.insert(entity.table, data, entity.joins), entity.joins)
        self._collections[entity.name] = [row] + self._collections[entity.name]
        logger.info(f"Added {entity.label} {row['id']}")
        return row

    def update(self, kind, row_id, partial):
        entity = get_entity(kind)
        row = resolve_relations(self.backend.update(entity.table, row_id, partial, entity.joins), entity.joins)
        self._collections[entity.name] = [
            row if str(existing['id']) == str(row_id) else existing
            for existing in self._collections[entity.name]
        ]
        logger.info(f"Updated {entity.label} {row_id}")
        return row

    def delete(self, kind, row_id):
        entity = get_entity(kind)
        self.backend.delete(entity.table, row_id)
        self._collections[entity.name] = [
            existing for existing in self._collections[entity.name]
            if str(existing['id']) != str(row_id)
        ]
        logger.info(f"Deleted {entity.label} {row_id}")

    def fetch_one(self, kind, row_id):
        """Read one row straight from the backend; RowNotFound when absent."""
        entity = get_entity(kind)
        row = self.backend.get(entity.table, row_id, entity.joins)
        if row is None:
            raise RowNotFound(f'{entity.label} {row_id} not found', status=404)
        return resolve_relations(row, entity.joins)

    def atomic(self):
        """Backend transaction; local collections roll back with it."""
        return _StoreTransaction(self)


class _StoreTransaction:

    def __init__(self, store):
        self.store = store
        self._backend_tx = None
        self._snapshot = None

    def __enter__(self):
        self._backend_tx = self.store.backend.atomic()
        self._backend_tx.__enter__()
        self._snapshot = {name: list(rows) for name, rows in self.store._collections.items()}
        return self.store

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self.store._collections = self._snapshot
        return self._backend_tx.__exit__(exc_type, exc, tb)
