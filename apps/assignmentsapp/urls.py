from django.urls import path

from apps.assignmentsapp import views

urlpatterns = [
    path("assignments/", views.AssignmentCreateView.as_view(), name="assignment-create"),
    path(
        "assignments/<uuid:pk>/",
        views.AssignmentDetailView.as_view(),
        name="assignment-detail",
    ),
    path(
        "assignments/<uuid:pk>/time-window/",
        views.AssignmentTimeWindowView.as_view(),
        name="assignment-time-window",
    ),
    path(
        "assignments/<uuid:pk>/extensions/",
        views.AssignmentExtensionRequestView.as_view(),
        name="assignment-extension-request",
    ),
    path("extensions/", views.ExtensionListView.as_view(), name="extension-list"),
    path(
        "extensions/<uuid:pk>/approve/",
        views.ExtensionApproveView.as_view(),
        name="extension-approve",
    ),
    path(
        "extensions/<uuid:pk>/reject/",
        views.ExtensionRejectView.as_view(),
        name="extension-reject",
    ),
]
