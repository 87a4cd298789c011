"""
Composition root: builds the backend once and the per-request stores.
"""
import logging
import threading
from dataclasses import dataclass

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.module_loading import import_string

from farmhub.core.backends import BACKENDS
from farmhub.core.composer import ViewComposer
from farmhub.core.exceptions import BackendError
from farmhub.core.session import SessionStore
from farmhub.core.store import DataStore

logger = logging.getLogger('farmhub.core')

_backend = None
_lock = threading.Lock()


def get_backend():
    global _backend
    with _lock:
        if _backend is None:
            name = getattr(settings, 'FARMHUB_BACKEND', 'orm')
            try:
                backend_class = import_string(BACKENDS[name])
            except KeyError:
                raise BackendError(f"Unknown FARMHUB_BACKEND '{name}'")
            _backend = backend_class()
            logger.info(f"Using {name} backend")
        return _backend


def reset_backend():
    global _backend
    with _lock:
        _backend = None


@receiver(setting_changed)
def _backend_setting_changed(sender, setting, **kwargs):
    if setting.startswith('FARMHUB_BACKEND'):
        reset_backend()


@dataclass
class AppContext:
    session: SessionStore
    store: DataStore
    composer: ViewComposer


def build_session():
    return SessionStore(get_backend())


def build_context(request):
    """Stores for the request's signed-in user (set by BackendSessionAuthentication)."""
    session = request.auth if isinstance(request.auth, SessionStore) else build_session()
    store = DataStore(session.backend)
    return AppContext(session=session, store=store, composer=ViewComposer(session, store))
