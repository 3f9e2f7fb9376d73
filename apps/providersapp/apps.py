from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class ProvidersAppConfig(AppConfig):
    name = "apps.providersapp"
    verbose_name = _("Service Providers")
