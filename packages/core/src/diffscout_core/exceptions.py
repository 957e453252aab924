"""Exception types raised by diffscout_core."""


class DiffscoutError(Exception):
    """Base class for all diffscout errors."""


class ProviderError(DiffscoutError):
    """The completion provider call failed.

    Raised by a reviewer when the upstream SDK errors. The aggregator catches
    it per file so one failing patch never aborts the whole review.
    """


class InvalidEventError(DiffscoutError):
    """A webhook payload is missing fields needed to build a ChangeEvent."""
