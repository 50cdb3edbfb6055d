"""Corpus validator: count, readability and resolution checks before rendering."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from .contracts import ImageDimensions, ValidationPolicy, ValidationReport
from .errors import EmptyCorpus, InvalidConfiguration, ValidationFailed
from .probe import probe_dimensions
from .scanner import scan_corpus

logger = logging.getLogger(__name__)

Probe = Callable[[Path], ImageDimensions | None]


def check_policy(policy: ValidationPolicy) -> None:
    if policy.min_image_count <= 0:
        raise InvalidConfiguration("--min-images must be greater than zero")
    if policy.min_short_side <= 0:
        raise InvalidConfiguration("--min-short-side must be greater than zero")


def validate_corpus(
    folder: Path,
    policy: ValidationPolicy,
    probe: Probe = probe_dimensions,
) -> ValidationReport:
    """Scan ``folder`` and check the images against ``policy``.

    Warnings are logged before a strict-mode failure is raised, so they are
    visible either way.
    """
    check_policy(policy)

    images = scan_corpus(folder)
    if not images:
        raise EmptyCorpus(folder)

    total = len(images)
    unreadable = 0
    low_resolution = 0
    for image in images:
        dims = probe(image.path)
        if dims is None:
            unreadable += 1
            continue
        if dims.short_side < policy.min_short_side:
            low_resolution += 1

    warnings: list[str] = []
    if total < policy.min_image_count:
        warnings.append(
            f"Only {total} images found; recommended minimum is {policy.min_image_count}"
        )
    if unreadable > 0:
        warnings.append(f"{unreadable} images could not be read and may fail processing")
    if low_resolution > 0:
        warnings.append(f"{low_resolution} images have short side below {policy.min_short_side}px")

    report = ValidationReport(
        total_count=total,
        unreadable_count=unreadable,
        low_resolution_count=low_resolution,
        warnings=tuple(warnings),
    )

    logger.info(f"Input image summary: {total} files found")
    for warning in report.warnings:
        logger.warning(warning)

    if policy.strict and report.warnings:
        raise ValidationFailed(report)
    return report
