# field_reports/views.py
from __future__ import annotations

from collections import defaultdict

import pytz

from django.conf import settings
from django.db.models import Count, F, Q
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import (
    Child,
    CoordinatorFieldNote,
    FieldNote,
    GeneratedReport,
    GeneratedReportLLMAnalysis,
    LearningCentre,
)
from .serializers import (
    ChildSerializer,
    CoordinatorFieldNoteSerializer,
    DistrictSerializer,
    FieldImageSerializer,
    FieldNoteSerializer,
    GeneratedReportSerializer,
    LearningCentreDetailSerializer,
    LearningCentreSerializer,
    LLMAnalysisSerializer,
    ReportFieldNoteSerializer,
)
from .services import format_display_date, highlight_aliases, newest_first, report_period_feed


def _resolve_tz(request) -> str:
    """?tz= query parameter, else the configured display timezone. Raises ValueError if unknown."""
    tzname = request.query_params.get("tz") or settings.DISPLAY_TIME_ZONE
    try:
        pytz.timezone(tzname)
    except pytz.UnknownTimeZoneError:
        raise ValueError("invalid tz.")
    return tzname


def _centres_with_alias_matching(state: str, district: str, term: str) -> set:
    """Ids of centres in the district with a child alias containing `term`. Child names are not searched."""
    needle = term.lower()
    rows = Child.objects.filter(
        learning_centre__state=state, learning_centre__district=district
    ).values_list("learning_centre_id", "alias")
    return {
        centre_id
        for centre_id, alias in rows
        if any(isinstance(a, str) and needle in a.lower() for a in (alias or []))
    }


def _annotate_notes(serialized_notes, text_field: str, aliases, tzname: str):
    """Attach alias highlight segments and a display date to each serialized note."""
    for note in serialized_notes:
        note["segments"] = highlight_aliases(note.get(text_field) or "", aliases)
        note["display_date"] = format_display_date(note.get("effective_at"), tzname)
    return serialized_notes


class DistrictListView(APIView):
    """GET /api/districts"""
    def get(self, request):
        rows = (
            LearningCentre.objects.values("state", "district")
            .annotate(learning_centres_count=Count("id"))
            .order_by("state", "district")
        )
        return Response(DistrictSerializer(rows, many=True).data, status=status.HTTP_200_OK)


class LearningCentreListView(APIView):
    """
    GET /api/districts/{state}/{district}/centres
      ?q=text   (optional, matches centre name, area, city, facilitator name or child alias)
    """
    def get(self, request, state: str, district: str):
        qs = (
            LearningCentre.objects.filter(state=state, district=district)
            .prefetch_related("facilitators", "partner_organisations")
            .order_by("centre_name")
        )
        term = (request.query_params.get("q") or "").strip()
        if len(term) > 255:
            return Response({"detail": "q must be at most 255 characters."}, status=400)
        if term:
            qs = qs.filter(
                Q(centre_name__icontains=term)
                | Q(area__icontains=term)
                | Q(city__icontains=term)
                | Q(facilitators__name__icontains=term)
                | Q(id__in=_centres_with_alias_matching(state, district, term))
            ).distinct()
        return Response(LearningCentreSerializer(qs, many=True).data, status=status.HTTP_200_OK)


class LearningCentreDetailView(APIView):
    """
    GET /api/centres/{centre_id}
    Centre with its rosters, generated reports (newest first, each with the
    field notes linked to it) and coordinator notes.
    """
    def get(self, request, centre_id):
        centre = get_object_or_404(
            LearningCentre.objects.prefetch_related(
                "facilitators", "partner_organisations", "volunteers", "children"
            ),
            pk=centre_id,
        )
        reports = list(
            GeneratedReport.objects.filter(learning_centre=centre)
            .with_summary()
            .order_by("-year", "-month")
        )
        notes_by_report = defaultdict(list)
        for note in FieldNote.objects.filter(generated_report__in=reports).order_by("-created_at", "id"):
            notes_by_report[note.generated_report_id].append(note)
        coordinator_notes = (
            CoordinatorFieldNote.objects.filter(learning_centre=centre)
            .select_related("coordinator")
            .order_by(F("noted_at").desc(nulls_last=True), "-created_at")
        )
        data = LearningCentreDetailSerializer(centre).data
        data["reports"] = GeneratedReportSerializer(reports, many=True).data
        for row, report in zip(data["reports"], reports):
            linked = notes_by_report.get(report.id, [])
            row["field_notes"] = ReportFieldNoteSerializer(linked, many=True).data
            row["field_notes_count"] = len(linked)
        data["coordinator_notes"] = CoordinatorFieldNoteSerializer(coordinator_notes, many=True).data
        return Response(data, status=status.HTTP_200_OK)


class ReportDetailView(APIView):
    """
    GET /api/reports/{report_id}
    Report summary plus the centre's images and notes for the report month.
    Either feed query failing fails the whole request.
    """
    def get(self, request, report_id):
        report = get_object_or_404(
            GeneratedReport.objects.with_summary(), pk=report_id
        )
        feed = report_period_feed(report)

        analysis = GeneratedReportLLMAnalysis.objects.filter(generated_report=report).first()

        return Response({
            "report": GeneratedReportSerializer(report).data,
            "images_count": len(feed["images"]),
            "notes_count": len(feed["notes"]),
            "images": FieldImageSerializer(feed["images"], many=True).data,
            "notes": FieldNoteSerializer(feed["notes"], many=True).data,
            "llm_analysis": LLMAnalysisSerializer(analysis).data if analysis else None,
        }, status=status.HTTP_200_OK)


class ChildFieldNotesView(APIView):
    """
    GET /api/children/{child_id}/notes
      ?tz=Asia/Kolkata   (optional, timezone of display_date)
    Facilitator and coordinator notes linked to a child, newest first,
    each split into segments with the child's aliases highlighted.
    """
    def get(self, request, child_id):
        try:
            tzname = _resolve_tz(request)
        except ValueError as e:
            return Response({"detail": str(e)}, status=400)

        child = get_object_or_404(Child.objects.select_related("learning_centre"), pk=child_id)
        aliases = child.clean_aliases()

        links = child.note_links.select_related(
            "field_note__facilitator", "coordinator_field_note__coordinator"
        )
        facilitator_notes = [link.field_note for link in links if link.field_note_id]
        coordinator_notes = [link.coordinator_field_note for link in links if link.coordinator_field_note_id]

        facilitator_notes = newest_first(facilitator_notes, primary="sent_at")
        facilitator_data = FieldNoteSerializer(facilitator_notes, many=True).data
        for row, note in zip(facilitator_data, facilitator_notes):
            row["facilitator"] = (
                {
                    "name": note.facilitator.name,
                    "contact_number": note.facilitator.contact_number,
                    "email": note.facilitator.email,
                }
                if note.facilitator_id else None
            )
        coordinator_data = CoordinatorFieldNoteSerializer(
            newest_first(coordinator_notes, primary="noted_at"), many=True
        ).data

        centre = child.learning_centre
        return Response({
            "child": ChildSerializer(child).data,
            "label": ", ".join(aliases) if aliases else "Unnamed Child",
            "learning_centre": {
                "id": centre.id,
                "centre_name": centre.centre_name,
                "city": centre.city,
                "state": centre.state,
            },
            "facilitator_notes": _annotate_notes(facilitator_data, "text", aliases, tzname),
            "coordinator_notes": _annotate_notes(coordinator_data, "note_text", aliases, tzname),
        }, status=status.HTTP_200_OK)


class CoordinatorFieldNoteDetailView(APIView):
    """GET /api/coordinator-notes/{note_id}?tz=..."""
    def get(self, request, note_id):
        try:
            tzname = _resolve_tz(request)
        except ValueError as e:
            return Response({"detail": str(e)}, status=400)

        note = get_object_or_404(
            CoordinatorFieldNote.objects.select_related("coordinator", "learning_centre"), pk=note_id
        )
        data = CoordinatorFieldNoteSerializer(note).data
        data["display_date"] = format_display_date(data.get("effective_at"), tzname)
        centre = note.learning_centre
        data["learning_centre"] = {
            "id": centre.id,
            "centre_name": centre.centre_name,
            "district": centre.district,
            "state": centre.state,
        }
        return Response(data, status=status.HTTP_200_OK)
