from django.apps import AppConfig

class OverdueConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'overdue'
    verbose_name = 'Overdue payments'
