# Longest window the availability endpoint accepts, one full day
MAX_MIN_DURATION_MINUTES = 1440

# Auto-selection walks at most this many days from the start date
AUTO_SELECT_MAX_DAYS = 90

# Thirty days of work
AUTO_SELECT_MAX_DURATION_MINUTES = 43200
