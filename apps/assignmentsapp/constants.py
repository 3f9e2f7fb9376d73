from django.utils.translation import gettext_lazy as _

# Bounds for a provider's time extension request (minutes)
MIN_EXTENSION_MINUTES = 15
MAX_EXTENSION_MINUTES = 240

# Free text lengths
MIN_EXTENSION_REASON_LENGTH = 10
MIN_REJECTION_NOTES_LENGTH = 10
MAX_REJECTION_NOTES_LENGTH = 1000

# User facing messages
EXTENSION_CONFLICT_MESSAGE = _(
    "Cannot extend by {minutes} minutes: the extended time overlaps another "
    "assignment of this provider."
)
SLOT_CONFLICT_MESSAGE = _(
    "The selected time slots overlap another assignment of this provider on that date."
)
TIME_WINDOW_CONFLICT_MESSAGE = _(
    "The requested time window overlaps another assignment of this provider."
)
