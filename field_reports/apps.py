from django.apps import AppConfig


class FieldReportsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "field_reports"
    verbose_name = "Field reports"
