import logging

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from farmhub.core.exceptions import BackendError

logger = logging.getLogger('farmhub.core')


class BackendSessionAuthentication(BaseAuthentication):
    """Bearer token checked by the configured backend.

    `request.user` becomes the session Profile and `request.auth` the
    SessionStore holding the token.
    """
    keyword = 'Bearer'

    def authenticate(self, request):
        auth = get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) != 2:
            raise exceptions.AuthenticationFailed('Invalid token header.')
        try:
            token = auth[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed('Invalid token header.')

        from farmhub.core.context import build_session
        session = build_session()
        try:
            restored = session.restore(token)
        except BackendError as e:
            logger.error(f"Token check failed: {e.message}", exc_info=True)
            raise exceptions.AuthenticationFailed('Could not verify token.')
        if not restored:
            raise exceptions.AuthenticationFailed('Token is invalid or expired.')
        return session.profile, session

    def authenticate_header(self, request):
        return self.keyword
