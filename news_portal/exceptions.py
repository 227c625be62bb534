"""Domain exceptions raised by the portal's fetchers, aggregator and speech."""


class NewsPortalError(Exception):
    """Base class for portal errors."""


class FeedFetchError(NewsPortalError):
    """Raised when the relay cannot deliver a feed or its envelope is unusable."""


class FeedParseError(NewsPortalError):
    """Raised when relayed feed contents are not well-formed XML."""


class NoNewsDataError(NewsPortalError):
    """Raised when neither the headlines API nor the fallback feeds produced articles."""


class SpeechUnavailableError(NewsPortalError):
    """Raised when no text-to-speech backend is available."""


class SpeechSynthesisError(NewsPortalError):
    """Raised when the speech backend fails while producing audio."""
