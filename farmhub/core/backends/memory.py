"""
In-process backend holding every table in dictionaries.

Used for demos (FARMHUB_BACKEND=memory) and as the substitute backend in
store and session tests.
"""
import copy
import logging
import secrets
import threading
import uuid
from contextlib import contextmanager

from django.utils import timezone

from farmhub.core.exceptions import AuthenticationError, RowNotFound
from farmhub.core.schema import jsonable
from .base import AuthBackend, AuthTokens, RowBackend

logger = logging.getLogger('farmhub.core.backends')


class MemoryBackend(AuthBackend, RowBackend):
    name = 'memory'

    def __init__(self):
        self._lock = threading.RLock()
        self._tables = {}
        self._accounts = {}
        self._access_tokens = {}
        self._refresh_tokens = {}

    # Account management (no counterpart in the row API)

    def create_account(self, email, password, profile):
        """Register a sign-in and its profile row; returns the profile row."""
        row = self.insert('profiles', profile)
        with self._lock:
            self._accounts[email.lower()] = (password, row['id'])
        return row

    # Auth

    def sign_in(self, email, password):
        account = self._accounts.get((email or '').lower())
        if account is None or account[0] != password:
            raise AuthenticationError('Invalid login credentials', status=400)
        return self._issue(account[1])

    def sign_out(self, tokens):
        with self._lock:
            self._access_tokens.pop(tokens.access, None)
            self._refresh_tokens.pop(tokens.refresh, None)

    def refresh(self, refresh_token):
        with self._lock:
            user_id = self._refresh_tokens.pop(refresh_token, None)
        if user_id is None:
            raise AuthenticationError('Invalid refresh token', status=401)
        return self._issue(user_id)

    def resolve_token(self, access_token):
        user_id = self._access_tokens.get(access_token)
        if user_id is None:
            raise AuthenticationError('Invalid or expired token', status=401)
        return user_id

    def _issue(self, user_id):
        tokens = AuthTokens(access=secrets.token_urlsafe(24), refresh=secrets.token_urlsafe(24), user_id=user_id)
        with self._lock:
            self._access_tokens[tokens.access] = user_id
            self._refresh_tokens[tokens.refresh] = user_id
        return tokens

    # Rows

    def _table(self, table):
        return self._tables.setdefault(table, [])

    def _find(self, table, row_id):
        for row in self._table(table):
            if str(row['id']) == str(row_id):
                return row
        return None

    def _embed(self, row, joins):
        result = copy.deepcopy(row)
        for join in joins:
            target = self._find(join.table, row.get(join.column)) if row.get(join.column) else None
            result[join.alias] = {name: target.get(name) for name in join.fields} if target else None
        return result

    def select(self, table, joins=()):
        with self._lock:
            return [self._embed(row, joins) for row in self._table(table)]

    def get(self, table, row_id, joins=()):
        with self._lock:
            row = self._find(table, row_id)
            return self._embed(row, joins) if row else None

    def insert(self, table, values, joins=()):
        now = timezone.now().isoformat()
        row = {'created_at': now, 'updated_at': now, **jsonable(dict(values))}
        row['id'] = str(row.get('id') or uuid.uuid4())
        with self._lock:
            # newest first, matching created_at descending order
            self._table(table).insert(0, row)
            return self._embed(row, joins)

    def update(self, table, row_id, values, joins=()):
        with self._lock:
            row = self._find(table, row_id)
            if row is None:
                raise RowNotFound(f'{table} row {row_id} not found', status=404)
            row.update(jsonable(dict(values)))
            row['updated_at'] = timezone.now().isoformat()
            return self._embed(row, joins)

    def delete(self, table, row_id):
        with self._lock:
            rows = self._table(table)
            remaining = [row for row in rows if str(row['id']) != str(row_id)]
            if len(remaining) == len(rows):
                raise RowNotFound(f'{table} row {row_id} not found', status=404)
            self._tables[table] = remaining

    @contextmanager
    def atomic(self):
        with self._lock:
            snapshot = copy.deepcopy(self._tables)
            try:
                yield self
            except Exception:
                logger.debug("Rolling back in-memory transaction")
                self._tables = snapshot
                raise
