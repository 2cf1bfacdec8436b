from django.urls import include, path

urlpatterns = [
    path("api/", include("field_reports.urls")),
]
