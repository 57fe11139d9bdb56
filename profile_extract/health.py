"""
Section health classification from pipeline diagnostics.
"""

from .models import HealthReport, HealthStatus, PipelineResult

HEALTHY_CONFIDENCE = 0.65
DEGRADED_CONFIDENCE = 0.35


def compute_status(confidence: float, item_count: int,
                   healthy: float = HEALTHY_CONFIDENCE,
                   degraded: float = DEGRADED_CONFIDENCE) -> HealthStatus:
    if item_count == 0 or confidence <= 0:
        return HealthStatus.BROKEN
    if confidence >= healthy:
        return HealthStatus.HEALTHY
    if confidence >= degraded:
        return HealthStatus.DEGRADED
    return HealthStatus.BROKEN


def build_health_report(section: str, result: PipelineResult,
                        healthy: float = HEALTHY_CONFIDENCE,
                        degraded: float = DEGRADED_CONFIDENCE) -> HealthReport:
    confidence = result.diagnostics.avg_confidence
    item_count = len(result.items)
    extractor = result.diagnostics.extractor_used
    status = compute_status(confidence, item_count, healthy, degraded)

    if status == HealthStatus.HEALTHY:
        message = f"{section} extraction healthy using {extractor}"
    elif status == HealthStatus.DEGRADED:
        message = f"{section} extraction degraded: {item_count} items, confidence {confidence:.2f}"
    else:
        message = f"{section} extraction broken: no reliable strategy succeeded"

    return HealthReport(
        section=section,
        status=status,
        extractor=extractor,
        confidence=confidence,
        item_count=item_count,
        message=message,
    )
