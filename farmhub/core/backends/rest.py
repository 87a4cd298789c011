"""
Client for a hosted backend-as-a-service (PostgREST row API + GoTrue auth).

Configured with FARMHUB_BACKEND_URL and FARMHUB_BACKEND_KEY (the public
anon key). Row calls carry the signed-in user's access token so the
service's row-level policies apply.
"""
import logging

import requests
from django.conf import settings

from farmhub.core.exceptions import (
    AuthenticationError, BackendError, RowNotFound, TransactionUnsupported,
)
from farmhub.core.schema import jsonable
from .base import AuthBackend, AuthTokens, RowBackend

logger = logging.getLogger('farmhub.core.backends')


def select_clause(joins):
    """Build the select parameter, e.g. `*,field:field_id(name)`."""
    parts = ['*']
    for join in joins:
        parts.append(f"{join.alias}:{join.column}({','.join(join.fields)})")
    return ','.join(parts)


class RestBackend(AuthBackend, RowBackend):
    name = 'rest'
    supports_concurrent_reads = True

    def __init__(self, base_url=None, api_key=None, timeout=None, access_token=None, session=None):
        self.base_url = (base_url or getattr(settings, 'FARMHUB_BACKEND_URL', '')).rstrip('/')
        self.api_key = api_key or getattr(settings, 'FARMHUB_BACKEND_KEY', '')
        self.timeout = timeout or getattr(settings, 'FARMHUB_BACKEND_TIMEOUT', 10)
        self.access_token = access_token
        self.session = session or requests.Session()
        if not self.base_url or not self.api_key:
            raise BackendError('FARMHUB_BACKEND_URL and FARMHUB_BACKEND_KEY must be set for the rest backend')

    def bind(self, access_token):
        return RestBackend(
            base_url=self.base_url, api_key=self.api_key, timeout=self.timeout,
            access_token=access_token, session=self.session,
        )

    def _headers(self, token=None, prefer=None):
        headers = {
            'apikey': self.api_key,
            'Authorization': f'Bearer {token or self.access_token or self.api_key}',
            'Content-Type': 'application/json',
        }
        if prefer:
            headers['Prefer'] = prefer
        return headers

    def _request(self, method, path, token=None, prefer=None, **kwargs):
        url = f'{self.base_url}{path}'
        try:
            response = self.session.request(
                method, url, headers=self._headers(token, prefer), timeout=self.timeout, **kwargs
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {path} failed: {str(e)}")
            raise BackendError(f'Backend unreachable: {e}') from e
        if response.status_code >= 400:
            message = self._error_message(response)
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            if response.status_code in (400, 401, 403) and path.startswith('/auth/'):
                raise AuthenticationError(message, status=response.status_code)
            raise BackendError(message, status=response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _error_message(response):
        try:
            payload = response.json()
        except ValueError:
            return response.text or response.reason
        if isinstance(payload, dict):
            return payload.get('message') or payload.get('error_description') or payload.get('msg') or str(payload)
        return str(payload)

    # Auth

    def _tokens(self, payload):
        try:
            return AuthTokens(
                access=payload['access_token'],
                refresh=payload['refresh_token'],
                user_id=str(payload['user']['id']),
            )
        except (KeyError, TypeError) as e:
            raise BackendError('Malformed token response') from e

    def sign_in(self, email, password):
        payload = self._request(
            'POST', '/auth/v1/token', params={'grant_type': 'password'},
            json={'email': email, 'password': password},
        )
        return self._tokens(payload)

    def sign_out(self, tokens):
        self._request('POST', '/auth/v1/logout', token=tokens.access)

    def refresh(self, refresh_token):
        payload = self._request(
            'POST', '/auth/v1/token', params={'grant_type': 'refresh_token'},
            json={'refresh_token': refresh_token},
        )
        return self._tokens(payload)

    def resolve_token(self, access_token):
        payload = self._request('GET', '/auth/v1/user', token=access_token)
        if not payload or 'id' not in payload:
            raise AuthenticationError('Token is invalid or expired.', status=401)
        return str(payload['id'])

    # Rows

    def select(self, table, joins=()):
        params = {'select': select_clause(joins), 'order': 'created_at.desc'}
        return self._request('GET', f'/rest/v1/{table}', params=params) or []

    def get(self, table, row_id, joins=()):
        params = {'select': select_clause(joins), 'id': f'eq.{row_id}'}
        rows = self._request('GET', f'/rest/v1/{table}', params=params) or []
        return rows[0] if rows else None

    def insert(self, table, values, joins=()):
        rows = self._request(
            'POST', f'/rest/v1/{table}', prefer='return=representation',
            params={'select': select_clause(joins)}, json=[jsonable(dict(values))],
        )
        if not rows:
            raise BackendError(f'Insert into {table} returned no row')
        return rows[0]

    def update(self, table, row_id, values, joins=()):
        rows = self._request(
            'PATCH', f'/rest/v1/{table}', prefer='return=representation',
            params={'select': select_clause(joins), 'id': f'eq.{row_id}'}, json=jsonable(dict(values)),
        )
        if not rows:
            raise RowNotFound(f'{table} row {row_id} not found', status=404)
        return rows[0]

    def delete(self, table, row_id):
        rows = self._request(
            'DELETE', f'/rest/v1/{table}', prefer='return=representation',
            params={'id': f'eq.{row_id}'},
        )
        if not rows:
            raise RowNotFound(f'{table} row {row_id} not found', status=404)

    def atomic(self):
        raise TransactionUnsupported(
            'The hosted row API cannot group writes; expose a server-side function for multi-row changes'
        )
