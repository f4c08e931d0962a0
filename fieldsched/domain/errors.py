"""
Fieldsched domain errors. No FastAPI.
"""


class SequencingError(Exception):
    """Base error for the sequencing engine."""


class InvalidInputError(SequencingError):
    """Task or resource collection is not a well-formed sequence of records."""


class TimeParseError(SequencingError):
    """A resource shift time could not be parsed into a clock-of-day value."""

    def __init__(self, resource_id: str, value: object, field: str = "shiftStart"):
        self.resource_id = resource_id
        self.value = value
        self.field = field
        super().__init__(
            f"Resource {resource_id!r}: cannot parse {field}={value!r} as a time of day"
        )
