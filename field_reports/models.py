import calendar
import uuid

from django.db import models
from django.utils import timezone


class PartnerOrganisation(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    url = models.URLField(blank=True)
    contact = models.CharField(max_length=255, blank=True)
    logo_url = models.URLField(blank=True)


class Facilitator(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    contact_number = models.CharField(max_length=32)
    email = models.EmailField(blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    alias = models.JSONField(default=list, blank=True)              # Names used for the facilitator in messages


class Volunteer(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)


class Coordinator(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    contact = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)


class LearningCentre(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    centre_name = models.CharField(max_length=255)
    area = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=255, blank=True)
    district = models.CharField(max_length=255, db_index=True)
    state = models.CharField(max_length=255, db_index=True)
    country = models.CharField(max_length=255, default="India")
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    facilitators = models.ManyToManyField(Facilitator, related_name="learning_centres", blank=True)
    partner_organisations = models.ManyToManyField(
        PartnerOrganisation, related_name="learning_centres", blank=True
    )
    volunteers = models.ManyToManyField(Volunteer, related_name="learning_centres", blank=True)

    class Meta:
        indexes = [
            models.Index(fields=["state", "district"], name="idx_centre_state_district"),
        ]


class Child(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    learning_centre = models.ForeignKey(LearningCentre, on_delete=models.CASCADE, related_name="children")
    name = models.CharField(max_length=255)                         # Never exposed through the API
    alias = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    def clean_aliases(self):
        """Aliases with surrounding whitespace stripped and blanks removed."""
        return [a.strip() for a in (self.alias or []) if isinstance(a, str) and a.strip()]


class GeneratedReportQuerySet(models.QuerySet):
    def with_summary(self):
        """Join facilitator and centre and annotate `has_llm_analysis` in the same query."""
        return self.select_related("facilitator", "learning_centre").annotate(
            has_llm_analysis=models.Exists(
                GeneratedReportLLMAnalysis.objects.filter(generated_report=models.OuterRef("pk"))
            )
        )


class GeneratedReport(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    facilitator = models.ForeignKey(Facilitator, on_delete=models.CASCADE, related_name="reports")
    learning_centre = models.ForeignKey(LearningCentre, on_delete=models.CASCADE, related_name="reports")
    month = models.PositiveSmallIntegerField()
    year = models.PositiveSmallIntegerField()
    created_at = models.DateTimeField(default=timezone.now)

    objects = GeneratedReportQuerySet.as_manager()

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=models.Q(month__gte=1, month__lte=12), name="ck_report_month_range"
            ),
        ]

    @property
    def month_year_display(self) -> str:
        # e.g. "Mar 2024"
        return f"{calendar.month_abbr[self.month]} {self.year}"


class GeneratedReportLLMAnalysis(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    generated_report = models.OneToOneField(
        GeneratedReport, on_delete=models.CASCADE, related_name="llm_analysis"
    )
    text = models.TextField()
    created_at = models.DateTimeField(default=timezone.now)


class FieldNote(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    learning_centre = models.ForeignKey(LearningCentre, on_delete=models.CASCADE, related_name="field_notes")
    facilitator = models.ForeignKey(
        Facilitator, null=True, blank=True, on_delete=models.SET_NULL, related_name="field_notes"
    )
    generated_report = models.ForeignKey(
        GeneratedReport, null=True, blank=True, on_delete=models.SET_NULL, related_name="+"
    )
    text = models.TextField()
    sent_at = models.DateTimeField(null=True, blank=True, db_index=True)   # When the message was actually sent
    created_at = models.DateTimeField(default=timezone.now, db_index=True)  # Row creation time (fallback)

    class Meta:
        indexes = [
            models.Index(fields=["learning_centre", "sent_at"], name="idx_note_centre_sent"),
        ]


class FieldImage(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    learning_centre = models.ForeignKey(LearningCentre, on_delete=models.CASCADE, related_name="field_images")
    facilitator = models.ForeignKey(
        Facilitator, null=True, blank=True, on_delete=models.SET_NULL, related_name="field_images"
    )
    generated_report = models.ForeignKey(
        GeneratedReport, null=True, blank=True, on_delete=models.SET_NULL, related_name="+"
    )
    url = models.URLField(max_length=1024)
    caption = models.TextField(blank=True)
    sent_at = models.DateTimeField(null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        indexes = [
            models.Index(fields=["learning_centre", "sent_at"], name="idx_image_centre_sent"),
        ]


class CoordinatorFieldNote(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    coordinator = models.ForeignKey(Coordinator, on_delete=models.CASCADE, related_name="field_notes")
    learning_centre = models.ForeignKey(
        LearningCentre, on_delete=models.CASCADE, related_name="coordinator_field_notes"
    )
    note_text = models.TextField()
    noted_at = models.DateTimeField(null=True, blank=True, default=timezone.now)
    created_at = models.DateTimeField(default=timezone.now)


class ChildFieldNoteLink(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    child = models.ForeignKey(Child, on_delete=models.CASCADE, related_name="note_links")
    field_note = models.ForeignKey(
        FieldNote, null=True, blank=True, on_delete=models.CASCADE, related_name="child_links"
    )
    coordinator_field_note = models.ForeignKey(
        CoordinatorFieldNote, null=True, blank=True, on_delete=models.CASCADE, related_name="child_links"
    )
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        constraints = [
            # Exactly one of the two note references is set.
            models.CheckConstraint(
                condition=(
                    models.Q(field_note__isnull=False, coordinator_field_note__isnull=True)
                    | models.Q(field_note__isnull=True, coordinator_field_note__isnull=False)
                ),
                name="ck_link_exactly_one_note",
            ),
        ]
