"""
Session store: who is signed in, and with which backend tokens.
"""
import logging
from dataclasses import dataclass

from django.conf import settings

from farmhub.core.backends.base import AuthTokens
from farmhub.core.exceptions import AuthenticationError, BackendError
from farmhub.core.roles import Role, as_role
from farmhub.core.schema import PROFILES_TABLE

logger = logging.getLogger('farmhub.core.session')

# Demo usernames and the backend accounts they sign in as
DEMO_ACCOUNTS = {
    'admin': 'admin@farm.zm',
    'manager': 'manager@farm.zm',
    'staff': 'staff@farm.zm',
    'customer': 'customer@farm.zm',
}

DEMO_PASSWORDS = {
    'admin': 'admin123',
    'manager': 'manager123',
    'staff': 'staff123',
    'customer': 'customer123',
}


@dataclass
class Profile:
    id: str
    username: str
    full_name: str
    role: Role
    email: str = None
    phone: str = None

    # DRF treats the authenticated principal like a Django user
    is_authenticated = True
    is_anonymous = False

    @property
    def pk(self):
        return self.id

    @classmethod
    def from_row(cls, row):
        return cls(
            id=str(row['id']),
            username=row.get('username') or '',
            full_name=row.get('full_name') or '',
            role=as_role(row.get('role')) or Role.STAFF,
            email=row.get('email') or None,
            phone=row.get('phone') or None,
        )

    def as_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'full_name': self.full_name,
            'role': self.role.value,
            'role_display': self.role.label,
            'email': self.email,
            'phone': self.phone,
        }


class SessionStore:
    """Holds the current profile; sign-in and sign-out go through the auth backend."""

    def __init__(self, backend, demo_login=None):
        self._backend = backend
        self.demo_login = getattr(settings, 'FARMHUB_DEMO_LOGIN', True) if demo_login is None else demo_login
        self.profile = None
        self.tokens = None
        self.access_token = None

    @property
    def is_authenticated(self):
        return self.profile is not None

    @property
    def role(self):
        return self.profile.role if self.profile else None

    @property
    def backend(self):
        """Row backend acting as the signed-in user."""
        if self.access_token:
            return self._backend.bind(self.access_token)
        return self._backend

    def email_for(self, username):
        username = (username or '').strip()
        if self.demo_login and username in DEMO_ACCOUNTS:
            return DEMO_ACCOUNTS[username]
        if '@' in username:
            return username
        return None

    def login(self, username, password):
        """Sign in; returns False for unknown usernames or rejected credentials."""
        email = self.email_for(username)
        if email is None:
            logger.warning(f"Login rejected for unknown username '{username}'")
            return False
        try:
            tokens = self._backend.sign_in(email, password)
        except AuthenticationError as e:
            logger.warning(f"Login failed for '{username}': {e.message}")
            return False
        except BackendError as e:
            logger.error(f"Login for '{username}' could not reach the backend: {e.message}", exc_info=True)
            return False

        self.tokens = tokens
        self.access_token = tokens.access
        if not self._load_profile(tokens.user_id):
            self.tokens = None
            self.access_token = None
            return False
        logger.info(f"User '{self.profile.username}' signed in as {self.profile.role.value}")
        return True

    def restore(self, access_token):
        """Re-hydrate the profile behind an existing access token."""
        try:
            user_id = self._backend.resolve_token(access_token)
        except AuthenticationError as e:
            logger.debug(f"Token rejected: {e.message}")
            return False
        self.access_token = access_token
        if not self._load_profile(user_id):
            self.access_token = None
            return False
        return True

    def _load_profile(self, user_id):
        try:
            row = self.backend.get(PROFILES_TABLE, user_id)
        except BackendError as e:
            logger.error(f"Error fetching profile {user_id}: {e.message}", exc_info=True)
            row = None
        if row is None:
            logger.warning(f"No profile row for user {user_id}")
            self.profile = None
            return False
        self.profile = Profile.from_row(row)
        return True

    def logout(self, refresh_token=None):
        """Clear the profile and invalidate the backend session (best effort)."""
        profile, tokens = self.profile, self.tokens
        self.profile = None
        self.tokens = None
        if tokens is None and self.access_token:
            tokens = AuthTokens(
                access=self.access_token, refresh=refresh_token or '', user_id=profile.id if profile else '',
            )
        self.access_token = None
        if tokens is None:
            return
        try:
            self._backend.sign_out(tokens)
            if profile:
                logger.info(f"User '{profile.username}' signed out")
        except BackendError as e:
            logger.warning(f"Sign-out failed: {e.message}")
