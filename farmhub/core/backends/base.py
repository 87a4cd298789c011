"""
Interfaces of the backend collaborator.

The application never stores rows or checks passwords itself: a backend
implements both the auth service and the row API behind these two classes.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class AuthTokens:
    access: str
    refresh: str
    user_id: str


class AuthBackend:
    """Password sign-in keyed by email plus bearer-token handling."""

    def sign_in(self, email, password):
        """Return AuthTokens; raise AuthenticationError on bad credentials."""
        raise NotImplementedError

    def sign_out(self, tokens):
        """Invalidate the session behind `tokens`."""
        raise NotImplementedError

    def refresh(self, refresh_token):
        """Exchange a refresh token for a new AuthTokens."""
        raise NotImplementedError

    def resolve_token(self, access_token):
        """Return the user id an access token belongs to."""
        raise NotImplementedError


class RowBackend:
    """Row-oriented data API over named tables.

    Reads are ordered by creation time, newest first. Each join in `joins`
    embeds the referenced row's fields under `join.alias` (None when the
    reference is empty or dangling).
    """

    supports_concurrent_reads = False

    def select(self, table, joins=()):
        raise NotImplementedError

    def get(self, table, row_id, joins=()):
        """Return one row or None."""
        raise NotImplementedError

    def insert(self, table, values, joins=()):
        raise NotImplementedError

    def update(self, table, row_id, values, joins=()):
        """Return the updated row; raise RowNotFound when it does not exist."""
        raise NotImplementedError

    def delete(self, table, row_id):
        raise NotImplementedError

    def atomic(self):
        """Context manager grouping writes into one transaction."""
        raise NotImplementedError

    def bind(self, access_token):
        """Return a backend acting on behalf of the token's user."""
        return self
