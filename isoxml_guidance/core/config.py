"""Rendering configuration loaded from environment variables.

All configuration values have defaults matching the behaviour expected by
guidance terminals: 5 km extension, a 1 m point-B offset for A+ patterns
and 10 swaths on each side when the pattern does not say otherwise.

``from_env()`` raises ``ConfigValidationError`` if any numeric value is
out of its valid range, so a bad deployment fails at startup rather than
producing silently wrong swaths.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from isoxml_guidance.core.constants import (
    DEFAULT_CONTAINMENT_TOLERANCE_DEG,
    DEFAULT_EXTENSION_M,
    DEFAULT_POINT_B_DISTANCE_M,
    DEFAULT_SWATH_COUNT,
)
from isoxml_guidance.core.exceptions import ValidationError


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        self.message = message
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class GuidanceConfig:
    """Immutable rendering configuration.

    Attributes:
        extension_m: Distance in metres each extended end is pushed out.
        point_b_distance_m: Distance in metres from point A to the derived
            point B of an A+ (point and heading) pattern.
        default_swath_count: Swaths generated per side when a pattern
            omits ``NumberOfSwathsLeft`` / ``NumberOfSwathsRight``.
        containment_tolerance_deg: Distance in degrees within which a
            vertex still counts as lying on a boundary.
    """

    extension_m: float = DEFAULT_EXTENSION_M
    point_b_distance_m: float = DEFAULT_POINT_B_DISTANCE_M
    default_swath_count: int = DEFAULT_SWATH_COUNT
    containment_tolerance_deg: float = DEFAULT_CONTAINMENT_TOLERANCE_DEG

    @classmethod
    def from_env(cls) -> GuidanceConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a numeric value is out of range.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``GUIDANCE_EXTENSION_M=abc``).
        """
        config = cls(
            extension_m=float(os.getenv("GUIDANCE_EXTENSION_M", str(DEFAULT_EXTENSION_M))),
            point_b_distance_m=float(
                os.getenv("GUIDANCE_POINT_B_DISTANCE_M", str(DEFAULT_POINT_B_DISTANCE_M))
            ),
            default_swath_count=int(
                os.getenv("GUIDANCE_DEFAULT_SWATH_COUNT", str(DEFAULT_SWATH_COUNT))
            ),
            containment_tolerance_deg=float(
                os.getenv(
                    "GUIDANCE_CONTAINMENT_TOLERANCE_DEG",
                    str(DEFAULT_CONTAINMENT_TOLERANCE_DEG),
                )
            ),
        )
        _validate(config)
        return config


def _validate(config: GuidanceConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.extension_m < 0:
        raise ConfigValidationError(
            "GUIDANCE_EXTENSION_M",
            config.extension_m,
            "must be >= 0 (metres)",
        )

    if config.point_b_distance_m <= 0:
        raise ConfigValidationError(
            "GUIDANCE_POINT_B_DISTANCE_M",
            config.point_b_distance_m,
            "must be > 0 (metres)",
        )

    if config.default_swath_count < 0:
        raise ConfigValidationError(
            "GUIDANCE_DEFAULT_SWATH_COUNT",
            config.default_swath_count,
            "must be >= 0",
        )

    if config.containment_tolerance_deg < 0:
        raise ConfigValidationError(
            "GUIDANCE_CONTAINMENT_TOLERANCE_DEG",
            config.containment_tolerance_deg,
            "must be >= 0 (degrees)",
        )
