import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Coordinator",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("contact", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="Facilitator",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("contact_number", models.CharField(max_length=32)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("alias", models.JSONField(blank=True, default=list)),
            ],
        ),
        migrations.CreateModel(
            name="PartnerOrganisation",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("url", models.URLField(blank=True)),
                ("contact", models.CharField(blank=True, max_length=255)),
                ("logo_url", models.URLField(blank=True)),
            ],
        ),
        migrations.CreateModel(
            name="Volunteer",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="LearningCentre",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("centre_name", models.CharField(max_length=255)),
                ("area", models.CharField(blank=True, max_length=255)),
                ("city", models.CharField(blank=True, max_length=255)),
                ("district", models.CharField(db_index=True, max_length=255)),
                ("state", models.CharField(db_index=True, max_length=255)),
                ("country", models.CharField(default="India", max_length=255)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "facilitators",
                    models.ManyToManyField(blank=True, related_name="learning_centres", to="field_reports.facilitator"),
                ),
                (
                    "partner_organisations",
                    models.ManyToManyField(
                        blank=True, related_name="learning_centres", to="field_reports.partnerorganisation"
                    ),
                ),
                (
                    "volunteers",
                    models.ManyToManyField(blank=True, related_name="learning_centres", to="field_reports.volunteer"),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["state", "district"], name="idx_centre_state_district")],
            },
        ),
        migrations.CreateModel(
            name="Child",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("alias", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "learning_centre",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="children",
                        to="field_reports.learningcentre",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="CoordinatorFieldNote",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("note_text", models.TextField()),
                ("noted_at", models.DateTimeField(blank=True, default=django.utils.timezone.now, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "coordinator",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="field_notes",
                        to="field_reports.coordinator",
                    ),
                ),
                (
                    "learning_centre",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="coordinator_field_notes",
                        to="field_reports.learningcentre",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="GeneratedReport",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("month", models.PositiveSmallIntegerField()),
                ("year", models.PositiveSmallIntegerField()),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "facilitator",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reports",
                        to="field_reports.facilitator",
                    ),
                ),
                (
                    "learning_centre",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reports",
                        to="field_reports.learningcentre",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("month__gte", 1), ("month__lte", 12)), name="ck_report_month_range"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="GeneratedReportLLMAnalysis",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("text", models.TextField()),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "generated_report",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="llm_analysis",
                        to="field_reports.generatedreport",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="FieldNote",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("text", models.TextField()),
                ("sent_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                (
                    "facilitator",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="field_notes",
                        to="field_reports.facilitator",
                    ),
                ),
                (
                    "generated_report",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="field_reports.generatedreport",
                    ),
                ),
                (
                    "learning_centre",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="field_notes",
                        to="field_reports.learningcentre",
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["learning_centre", "sent_at"], name="idx_note_centre_sent")],
            },
        ),
        migrations.CreateModel(
            name="FieldImage",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("url", models.URLField(max_length=1024)),
                ("caption", models.TextField(blank=True)),
                ("sent_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                (
                    "facilitator",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="field_images",
                        to="field_reports.facilitator",
                    ),
                ),
                (
                    "generated_report",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="field_reports.generatedreport",
                    ),
                ),
                (
                    "learning_centre",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="field_images",
                        to="field_reports.learningcentre",
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["learning_centre", "sent_at"], name="idx_image_centre_sent")],
            },
        ),
        migrations.CreateModel(
            name="ChildFieldNoteLink",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "child",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="note_links",
                        to="field_reports.child",
                    ),
                ),
                (
                    "coordinator_field_note",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="child_links",
                        to="field_reports.coordinatorfieldnote",
                    ),
                ),
                (
                    "field_note",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="child_links",
                        to="field_reports.fieldnote",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("coordinator_field_note__isnull", True), ("field_note__isnull", False)),
                            models.Q(("coordinator_field_note__isnull", False), ("field_note__isnull", True)),
                            _connector="OR",
                        ),
                        name="ck_link_exactly_one_note",
                    )
                ],
            },
        ),
    ]
