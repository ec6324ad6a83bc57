class TripPlannerError(Exception):
    """Base class for errors shown to the person planning a trip."""

    message = "Something went wrong."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class TripValidationError(TripPlannerError):
    """Form input is incomplete; raised before any network call."""

    message = "Please enter both origin and destination."


class FetchError(TripPlannerError):
    """The relay could not be reached or returned something unusable."""

    message = "Failed to get directions. Please check your connection and try again."
