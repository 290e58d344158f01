from django.apps import AppConfig


class PackagesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'packages'
    verbose_name = 'Packages'

    def ready(self):
        import packages.signals  # noqa: F401
