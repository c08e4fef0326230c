from django.apps import AppConfig


class ConfiguratorConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.configurator'
    verbose_name = 'Configurador de Produtos'

    def ready(self):
        from . import signals  # noqa: F401
