"""Custom exception hierarchy for Stageside.

All application exceptions inherit from :class:`StagesideError`, which
carries an optional ``source`` so error handlers can identify which input
(e.g. a YAML table file or a lineup JSON file) caused the failure.

    StagesideError  (base -- catch-all for any stageside error)
    +-- ConfigurationError  (malformed matching tables, invalid options)
    +-- InputError          (unreadable or invalid CLI input files)

The matching and scheduling engine itself degrades instead of raising on
bad data (unknown names, missing times, empty inputs).  Only programmer
errors surface as exceptions.
"""


class StagesideError(Exception):
    """Base exception for all Stageside errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``source`` naming the file or table that triggered the error.  The
    ``__str__`` method prefixes the source in brackets for structured log
    output, e.g. ``[tables.yaml] strength must be within 0..1``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        source: str | None = None,
    ) -> None:
        self._message = message
        self._source = source
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def source(self) -> str | None:
        return self._source

    def __str__(self) -> str:
        if self._source:
            return f"[{self._source}] {self._message}"
        return self._message


class ConfigurationError(StagesideError):
    """Raised when static tables or engine options are structurally invalid."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        source: str | None = None,
    ) -> None:
        super().__init__(message=message, source=source)


class InputError(StagesideError):
    """Raised when a lineup or profile input file cannot be read or validated."""

    def __init__(
        self,
        message: str = "Invalid input data",
        source: str | None = None,
    ) -> None:
        super().__init__(message=message, source=source)
