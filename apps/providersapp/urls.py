from django.urls import path

from apps.providersapp import views

urlpatterns = [
    path(
        "<uuid:provider_id>/availability/<str:date>/",
        views.ProviderAvailabilityView.as_view(),
        name="provider-availability",
    ),
    path(
        "<uuid:provider_id>/auto-select/",
        views.ProviderAutoSelectView.as_view(),
        name="provider-auto-select",
    ),
    path(
        "<uuid:provider_id>/slots/<uuid:slot_id>/capacity/<str:date>/",
        views.SlotCapacityView.as_view(),
        name="slot-capacity",
    ),
    path(
        "<uuid:provider_id>/time-slots/",
        views.ProviderTimeSlotsView.as_view(),
        name="provider-time-slots",
    ),
]
