from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'farmhub.core'

    def ready(self):
        """Connect the backend reset on settings changes"""
        import farmhub.core.context  # noqa: F401
