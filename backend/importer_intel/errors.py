"""Exceptions raised across search and enrichment.

A stale result (a response for a target that is no longer active) is not an
error: the record store simply reports it was not applied.
"""


class MalformedResponseError(ValueError):
    """The collaborator's text did not contain a decodable JSON object."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(
            "Failed to process data from the API. "
            "The response was not in the expected JSON format."
        )


class GenerationError(RuntimeError):
    """The generative collaborator call itself failed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to retrieve data. {reason}")


class SearchRejected(ValueError):
    """A search was refused before any request was issued."""

    BLANK = "blank"
    IN_FLIGHT = "in_flight"

    def __init__(self, reason: str):
        self.reason = reason
        message = (
            "A search is already in progress."
            if reason == self.IN_FLIGHT
            else "Enter a company name, product, city, state or industry to search."
        )
        super().__init__(message)
