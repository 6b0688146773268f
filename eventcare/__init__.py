"""EventCare EPCR: event medical coverage and patient care records."""

__version__ = "0.1.0"
