"""Unified exception taxonomy.

Provides a shared base exception hierarchy for parsing, configuration and
rendering. Every domain exception inherits from ``PipelineError`` and
carries structured context fields so callers can decide whether to skip
a pattern, abort a document, or surface the problem to an operator.

Taxonomy categories
-------------------
- ``ValidationError``   — invalid task data or configuration values.
- ``PermanentError``    — unrecoverable domain failures, not retryable.

The rendering pipeline is deterministic, so nothing here is retryable:
the same input always produces the same failure.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging and API responses.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for all guidance-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"parse_taskdata"``, ``"render_pattern"``).
        code: Machine-readable error code (e.g. ``"PATTERN_TYPE_UNSUPPORTED"``).
        retryable: Whether retrying could change the outcome.
        correlation_id: Identifier of the entity being processed
            (usually the ISOXML object id such as ``"GPN1"``).
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        return "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(PipelineError):
    """Input or domain-model validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(PipelineError):
    """Unrecoverable domain failure. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Rendering errors
# ---------------------------------------------------------------------------


class GuidanceRenderError(PermanentError):
    """A guidance pattern cannot be rendered into swath lines."""

    default_stage = "render_pattern"
    default_code = "PATTERN_RENDER_FAILED"


class UnsupportedPatternTypeError(GuidanceRenderError):
    """The pattern type (Curve, Pivot, Spiral) has no line rendering."""

    default_code = "PATTERN_TYPE_UNSUPPORTED"


class MissingGeometryError(GuidanceRenderError):
    """The reference line is absent, empty, or too short for the pattern type."""

    default_code = "PATTERN_GEOMETRY_MISSING"


class MissingHeadingError(GuidanceRenderError):
    """A point-plus-heading pattern carries no heading value."""

    default_code = "PATTERN_HEADING_MISSING"
