"""
FacilityHub algorithms package.

Pure computations with no Django dependency, consumed by the apps' service
layers:
- availability: clock-time ranges, gap finding, first-fit and capacity math
"""

__version__ = "1.0.0"
