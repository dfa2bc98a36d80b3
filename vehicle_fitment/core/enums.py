"""Enums for signature-related constants."""

from enum import Enum


class MissingField(str, Enum):
    """Structural fields a descriptor must yield to be considered complete.

    Declaration order is the order fields are reported in.
    """

    MODEL = "model"
    YEARS = "years"
    VOLUME = "volume"
    VALVES = "valves"
    ENGINE = "engine"


# Display labels used when grouping descriptors that failed to parse
UNKNOWN_MODEL_LABEL = "Другие"
ALL_YEARS_LABEL = "Все года"
ALL_MODIFICATIONS_LABEL = "Все модификации"

# Open-ended production marker ("to present")
OPEN_ENDED_YEAR = "н.в."
