"""Error taxonomy shared by the gateway, store and caller flows."""


class SehatSenseError(Exception):
    """Base class for errors surfaced to the user."""

    user_message = "Something went wrong. Please try again."


class ExtractionError(SehatSenseError):
    """A report upload produced no parsable lab values."""

    user_message = (
        "Could not read report. Please upload a clearer image or enter manually."
    )


class ParseError(SehatSenseError):
    """The model response did not contain the expected JSON shape."""

    user_message = "Sorry, we couldn't process that. Please try again."

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


class ServiceUnavailable(SehatSenseError):
    """The generative service could not be reached or failed."""

    user_message = (
        "We couldn't reach the health coach service. "
        "Please check your connection and try again."
    )


class ProfileValidationError(SehatSenseError, ValueError):
    """Profile input is incomplete or invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.user_message = message


class ProfileMissingError(SehatSenseError):
    """An operation needs a profile but none has been set up."""

    user_message = "Please complete your health profile first."
