from django.urls import path
from .views import (
    ChildFieldNotesView,
    CoordinatorFieldNoteDetailView,
    DistrictListView,
    LearningCentreDetailView,
    LearningCentreListView,
    ReportDetailView,
)

urlpatterns = [
    path("districts", DistrictListView.as_view(), name="district-list"),
    path("districts/<str:state>/<str:district>/centres", LearningCentreListView.as_view(), name="centre-list"),
    path("centres/<uuid:centre_id>", LearningCentreDetailView.as_view(), name="centre-detail"),
    path("reports/<uuid:report_id>", ReportDetailView.as_view(), name="report-detail"),
    path("children/<uuid:child_id>/notes", ChildFieldNotesView.as_view(), name="child-notes"),
    path("coordinator-notes/<uuid:note_id>", CoordinatorFieldNoteDetailView.as_view(), name="coordinator-note-detail"),
]
