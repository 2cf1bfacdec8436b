# field_reports/serializers.py
import datetime as dt

from django.utils import timezone
from rest_framework import serializers

from .models import (
    Child,
    Coordinator,
    CoordinatorFieldNote,
    Facilitator,
    FieldImage,
    FieldNote,
    GeneratedReport,
    GeneratedReportLLMAnalysis,
    LearningCentre,
    PartnerOrganisation,
    Volunteer,
)
from .services import effective_timestamp


class AwareDateTimeField(serializers.DateTimeField):
    """
    Output-only datetime field: naive values are read as UTC and every
    value is rendered as ISO in UTC (Z).
    """
    def to_representation(self, value):
        if value is None:
            return None
        if timezone.is_naive(value):
            value = timezone.make_aware(value, dt.timezone.utc)
        return super().to_representation(value.astimezone(dt.timezone.utc))


class DistrictSerializer(serializers.Serializer):
    state = serializers.CharField()
    district = serializers.CharField()
    learning_centres_count = serializers.IntegerField()


class FacilitatorSerializer(serializers.ModelSerializer):
    class Meta:
        model = Facilitator
        fields = ("id", "name", "contact_number", "email", "start_date", "end_date", "alias")


class PartnerOrganisationSerializer(serializers.ModelSerializer):
    class Meta:
        model = PartnerOrganisation
        fields = ("id", "name", "url", "contact", "logo_url")


class VolunteerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Volunteer
        fields = ("id", "name")


class ChildSerializer(serializers.ModelSerializer):
    """Children are identified by alias only; the stored name is never returned."""
    alias = serializers.SerializerMethodField()

    class Meta:
        model = Child
        fields = ("id", "alias")

    def get_alias(self, obj) -> list:
        return obj.clean_aliases()


class LearningCentreSerializer(serializers.ModelSerializer):
    facilitators = FacilitatorSerializer(many=True, read_only=True)
    partner_organisations = PartnerOrganisationSerializer(many=True, read_only=True)
    created_at = AwareDateTimeField(read_only=True)

    class Meta:
        model = LearningCentre
        fields = (
            "id",
            "centre_name",
            "area",
            "city",
            "district",
            "state",
            "country",
            "start_date",
            "end_date",
            "created_at",
            "facilitators",
            "partner_organisations",
        )


class LearningCentreDetailSerializer(LearningCentreSerializer):
    volunteers = VolunteerSerializer(many=True, read_only=True)
    children = ChildSerializer(many=True, read_only=True)

    class Meta(LearningCentreSerializer.Meta):
        fields = LearningCentreSerializer.Meta.fields + ("volunteers", "children")


class GeneratedReportSerializer(serializers.ModelSerializer):
    """Report row with the facilitator/centre names and display label joined in."""
    facilitator_name = serializers.CharField(source="facilitator.name", read_only=True)
    learning_centre_name = serializers.CharField(source="learning_centre.centre_name", read_only=True)
    month_year_display = serializers.CharField(read_only=True)
    has_llm_analysis = serializers.BooleanField(read_only=True)
    created_at = AwareDateTimeField(read_only=True)

    class Meta:
        model = GeneratedReport
        fields = (
            "id",
            "facilitator_id",
            "learning_centre_id",
            "month",
            "year",
            "created_at",
            "facilitator_name",
            "learning_centre_name",
            "month_year_display",
            "has_llm_analysis",
        )


class LLMAnalysisSerializer(serializers.ModelSerializer):
    created_at = AwareDateTimeField(read_only=True)

    class Meta:
        model = GeneratedReportLLMAnalysis
        fields = ("id", "text", "created_at")


class ReportFieldNoteSerializer(serializers.ModelSerializer):
    """Field note as listed under a report on the centre page."""
    created_at = AwareDateTimeField(read_only=True)

    class Meta:
        model = FieldNote
        fields = ("id", "text", "created_at")


class _TimelineSerializer(serializers.ModelSerializer):
    """Adds `effective_at`: the timestamp the row is ordered by."""
    primary_field = "sent_at"
    effective_at = serializers.SerializerMethodField()

    def get_effective_at(self, obj):
        ts = effective_timestamp(obj, primary=self.primary_field)
        return AwareDateTimeField().to_representation(ts)


class FieldNoteSerializer(_TimelineSerializer):
    sent_at = AwareDateTimeField(read_only=True)
    created_at = AwareDateTimeField(read_only=True)

    class Meta:
        model = FieldNote
        fields = ("id", "learning_centre_id", "facilitator_id", "text", "sent_at", "created_at", "effective_at")


class FieldImageSerializer(_TimelineSerializer):
    sent_at = AwareDateTimeField(read_only=True)
    created_at = AwareDateTimeField(read_only=True)

    class Meta:
        model = FieldImage
        fields = (
            "id", "learning_centre_id", "facilitator_id", "url", "caption", "sent_at", "created_at", "effective_at",
        )


class CoordinatorSerializer(serializers.ModelSerializer):
    class Meta:
        model = Coordinator
        fields = ("id", "name", "contact")


class CoordinatorFieldNoteSerializer(_TimelineSerializer):
    primary_field = "noted_at"
    coordinator = CoordinatorSerializer(read_only=True)
    noted_at = AwareDateTimeField(read_only=True)
    created_at = AwareDateTimeField(read_only=True)

    class Meta:
        model = CoordinatorFieldNote
        fields = ("id", "learning_centre_id", "coordinator", "note_text", "noted_at", "created_at", "effective_at")
