import uuid

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("providersapp", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Assignment",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("title", models.CharField(blank=True, max_length=255, verbose_name="Title")),
                ("scheduled_date", models.DateField(verbose_name="Scheduled Date")),
                (
                    "scheduled_end_date",
                    models.DateField(blank=True, null=True, verbose_name="Scheduled End Date"),
                ),
                (
                    "assigned_start_time",
                    models.TimeField(blank=True, null=True, verbose_name="Assigned Start Time"),
                ),
                (
                    "assigned_end_time",
                    models.TimeField(blank=True, null=True, verbose_name="Assigned End Time"),
                ),
                (
                    "allocated_duration_minutes",
                    models.PositiveIntegerField(
                        blank=True, null=True, verbose_name="Allocated Duration (minutes)"
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("assigned", "Assigned"),
                            ("in_progress", "In Progress"),
                            ("on_hold", "On Hold"),
                            ("finished", "Finished"),
                            ("completed", "Completed"),
                        ],
                        default="assigned",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("started_at", models.DateTimeField(blank=True, null=True, verbose_name="Started At")),
                ("held_at", models.DateTimeField(blank=True, null=True, verbose_name="Held At")),
                ("resumed_at", models.DateTimeField(blank=True, null=True, verbose_name="Resumed At")),
                ("finished_at", models.DateTimeField(blank=True, null=True, verbose_name="Finished At")),
                (
                    "completed_at",
                    models.DateTimeField(blank=True, null=True, verbose_name="Completed At"),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                (
                    "service_provider",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="assignments",
                        to="providersapp.serviceprovider",
                        verbose_name="Service Provider",
                    ),
                ),
                (
                    "time_slots",
                    models.ManyToManyField(
                        blank=True,
                        related_name="assignments",
                        to="providersapp.timeslot",
                        verbose_name="Time Slots",
                    ),
                ),
            ],
            options={
                "verbose_name": "Assignment",
                "verbose_name_plural": "Assignments",
                "ordering": ["scheduled_date", "assigned_start_time"],
                "indexes": [
                    models.Index(
                        fields=["service_provider", "scheduled_date", "status"],
                        name="assignment_provider_date_idx",
                    )
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("assigned_start_time__isnull", True),
                            ("assigned_end_time__isnull", True),
                            ("assigned_start_time__lt", models.F("assigned_end_time")),
                            _connector="OR",
                        ),
                        name="assignment_start_before_end",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="TimeExtensionRequest",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "requested_minutes",
                    models.PositiveIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(15),
                            django.core.validators.MaxValueValidator(240),
                        ],
                        verbose_name="Requested Minutes",
                    ),
                ),
                ("reason", models.TextField(verbose_name="Reason")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("approved", "Approved"),
                            ("rejected", "Rejected"),
                        ],
                        default="pending",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("admin_notes", models.TextField(blank=True, verbose_name="Admin Notes")),
                (
                    "requested_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now, verbose_name="Requested At"
                    ),
                ),
                (
                    "responded_at",
                    models.DateTimeField(blank=True, null=True, verbose_name="Responded At"),
                ),
                (
                    "assignment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="extension_requests",
                        to="assignmentsapp.assignment",
                        verbose_name="Assignment",
                    ),
                ),
                (
                    "requested_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="requested_extensions",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Requested By",
                    ),
                ),
                (
                    "responded_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="responded_extensions",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Responded By",
                    ),
                ),
            ],
            options={
                "verbose_name": "Time Extension Request",
                "verbose_name_plural": "Time Extension Requests",
                "ordering": ["-requested_at"],
                "indexes": [
                    models.Index(fields=["status", "requested_at"], name="extension_status_idx")
                ],
            },
        ),
    ]
