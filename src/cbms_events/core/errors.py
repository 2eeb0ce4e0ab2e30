"""Error taxonomy for the dashboard core.

Propagation rules:
- FetchError: absorbed by SyncController into status="error"
- AppendError: surfaced to the registration caller
- SummarizationError: absorbed by InsightRequester into an error result
- InsightValidationError: raised synchronously, collaborator never called
"""


class CbmsError(Exception):
    """Base class for all dashboard errors."""


class FetchError(CbmsError):
    """Record store unreachable or returned a malformed response."""


class AppendError(CbmsError):
    """Record store rejected or failed to persist a registration."""


class SummarizationError(CbmsError):
    """Summarization collaborator unreachable or returned a malformed response."""


class InsightValidationError(CbmsError):
    """Insight requested over an empty record set."""
