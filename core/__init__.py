"""
Shared components for the FacilityHub platform.

Holds the exception hierarchy every app raises and the DRF exception handler
that turns it into API responses.
"""

__version__ = "1.0.0"
