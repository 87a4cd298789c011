from .base import AuthBackend, AuthTokens, RowBackend

BACKENDS = {
    'orm': 'farmhub.core.backends.orm.OrmBackend',
    'rest': 'farmhub.core.backends.rest.RestBackend',
    'memory': 'farmhub.core.backends.memory.MemoryBackend',
}

__all__ = ['AuthBackend', 'AuthTokens', 'RowBackend', 'BACKENDS']
