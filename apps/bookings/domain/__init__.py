"""Value types of the booking domain."""

from .car_summary import CarSummary

__all__ = ["CarSummary"]
