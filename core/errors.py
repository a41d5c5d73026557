# core/errors.py

GENERATION_FAILED_MESSAGE = "Itinerary generation failed, please try again."


class PlannerError(Exception):
    """Base class for every error raised by the itinerary pipeline."""


class GenerationFailed(PlannerError):
    """A generation cycle produced no itinerary. Shown to the user as a retry prompt."""

    user_message = GENERATION_FAILED_MESSAGE


class UpstreamUnavailable(GenerationFailed):
    """The text-generation call failed, timed out or is not configured."""


class ExtractionFailure(GenerationFailed):
    """No parseable payload could be recovered from the model text."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class ValidationFailure(GenerationFailed):
    """The payload parsed but does not have the minimum itinerary shape."""


class GenerationInProgress(PlannerError):
    """A generation request was submitted while another one is still in flight."""


class RateUnavailable(PlannerError):
    """Live exchange rates could not be fetched. Recovered with fallback rates."""


class StorageUnavailable(PlannerError):
    """A stored value is missing or unreadable. Recovered with defaults."""
