"""Guidance group and task-data rendering orchestration.

Coordinates the per-pattern rendering activity:

1. Convert the group's boundary polygons once
2. Fan-out per pattern: render against the group boundary
3. Fan-in: concatenate every pattern's features into one collection

Failure policy: a pattern that cannot be rendered (unsupported type,
missing geometry or heading) is skipped with a warning by default, so one
bad pattern does not hide the rest of the field.  Pass
``skip_invalid=False`` to propagate the first failure instead.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from isoxml_guidance.activities.boundary_polygon import to_multi_polygon
from isoxml_guidance.activities.render_pattern import render_pattern
from isoxml_guidance.core.exceptions import GuidanceRenderError
from isoxml_guidance.models.contracts import feature_collection

if TYPE_CHECKING:
    from isoxml_guidance.core.config import GuidanceConfig
    from isoxml_guidance.models.contracts import FeatureCollection, SwathFeature
    from isoxml_guidance.models.guidance import (
        GuidanceGroupAttributes,
        GuidanceShift,
        TaskData,
    )

logger = logging.getLogger("isoxml_guidance.orchestrators.guidance_group")


def render_group(
    group: GuidanceGroupAttributes,
    guidance_shift: GuidanceShift | None = None,
    *,
    config: GuidanceConfig | None = None,
    skip_invalid: bool = True,
) -> FeatureCollection:
    """Render every pattern of a guidance group into one feature collection.

    Args:
        group: The parsed guidance group.
        guidance_shift: Shift metadata passed through to every feature.
        config: Rendering configuration (defaults when ``None``).
        skip_invalid: Skip patterns that fail to render (logging a
            warning) instead of raising.

    Returns:
        A FeatureCollection holding the features of every rendered
        pattern, in pattern order.  Empty for a group without patterns.

    Raises:
        GuidanceRenderError: Only when ``skip_invalid`` is ``False`` and a
            pattern fails to render.
    """
    boundary = to_multi_polygon(group.boundary_polygons)

    features: list[SwathFeature] = []
    skipped = 0
    for pattern in group.patterns:
        try:
            rendered = render_pattern(pattern, boundary, guidance_shift, config=config)
        except GuidanceRenderError as exc:
            if not skip_invalid:
                raise
            skipped += 1
            logger.warning(
                "Skipping guidance pattern | group=%s | pattern=%s | code=%s | %s",
                group.group_id,
                pattern.pattern_id,
                exc.code,
                exc.message,
            )
            continue
        features.extend(rendered["features"])

    logger.info(
        "Group rendered | group=%s | patterns=%d | skipped=%d | features=%d",
        group.group_id,
        len(group.patterns),
        skipped,
        len(features),
    )
    return feature_collection(features)


def render_task_data(
    task_data: TaskData,
    *,
    config: GuidanceConfig | None = None,
    skip_invalid: bool = True,
) -> FeatureCollection:
    """Render every guidance group of a parsed task-data document.

    Each group receives the first guidance shift that references it.

    Raises:
        GuidanceRenderError: Only when ``skip_invalid`` is ``False`` and a
            pattern fails to render.
    """
    features: list[SwathFeature] = []
    for group in task_data.guidance_groups:
        rendered = render_group(
            group,
            task_data.shift_for_group(group.group_id),
            config=config,
            skip_invalid=skip_invalid,
        )
        features.extend(rendered["features"])

    logger.info(
        "Task data rendered | source=%s | groups=%d | features=%d",
        task_data.source_file or "<memory>",
        len(task_data.guidance_groups),
        len(features),
    )
    return feature_collection(features)
