"""
Exception hierarchy for the website health checker.

Probe-level failures (transport errors, header mismatches) are normally
surfaced as failed Outcomes rather than raised. The exceptions below cross
component boundaries: configuration problems that prevent a run from starting,
transport failures reported by an HTTP client, and rounds that could not
deliver every Outcome.
"""

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .domain import Outcome


class SitewatchError(Exception):
    """Base class for all errors raised by sitewatch."""


class ConfigurationError(SitewatchError):
    """Raised when the run configuration is invalid. No round is started."""


class TransportError(SitewatchError):
    """
    Raised by an HttpClient when an HTTP exchange could not be completed.

    Connection refusals, DNS failures and timeouts all map to this error.
    Receiving a response with an error status code is not a transport error.
    """


class IncompleteRoundError(SitewatchError):
    """
    Raised when a round ends with fewer Outcomes than submitted URLs.

    Attributes:
        expected: The number of URLs submitted in the round.
        outcomes: The Outcomes that did arrive before the worker pool exited.
    """

    def __init__(self, expected: int, outcomes: "List[Outcome]") -> None:
        super().__init__(f"Round incomplete: received {len(outcomes)} of {expected} outcomes.")
        self.expected: int = expected
        self.outcomes: "List[Outcome]" = outcomes
