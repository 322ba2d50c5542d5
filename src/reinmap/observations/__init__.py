"""Observation table loading."""

from .exceptions import ObservationError, ObservationFormatError
from .loader import load_observations
from .models import ObservationRecord

__all__ = [
    "ObservationError",
    "ObservationFormatError",
    "ObservationRecord",
    "load_observations",
]
