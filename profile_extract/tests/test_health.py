#!/usr/bin/env python3
"""
Health Report Tests
===================

Run:
    python -m pytest profile_extract/tests/test_health.py
"""

import unittest

from profile_extract.health import build_health_report, compute_status
from profile_extract.models import HealthStatus, PipelineDiagnostics, PipelineResult


def result(items, confidence, extractor='aria'):
    return PipelineResult(
        items=items,
        diagnostics=PipelineDiagnostics(section='experience', extractor_used=extractor, avg_confidence=confidence),
    )


class TestHealth(unittest.TestCase):

    def test_status_thresholds(self):
        self.assertEqual(compute_status(0.9, 3), HealthStatus.HEALTHY)
        self.assertEqual(compute_status(0.65, 3), HealthStatus.HEALTHY)
        self.assertEqual(compute_status(0.5, 3), HealthStatus.DEGRADED)
        self.assertEqual(compute_status(0.2, 3), HealthStatus.BROKEN)
        self.assertEqual(compute_status(0.9, 0), HealthStatus.BROKEN)
        self.assertEqual(compute_status(0.0, 4), HealthStatus.BROKEN)

    def test_custom_thresholds(self):
        self.assertEqual(compute_status(0.5, 1, healthy=0.4, degraded=0.2), HealthStatus.HEALTHY)

    def test_reports(self):
        healthy = build_health_report('experience', result(['a'], 0.8))
        self.assertEqual(healthy.status, HealthStatus.HEALTHY)
        self.assertEqual(healthy.message, "experience extraction healthy using aria")

        degraded = build_health_report('experience', result(['a', 'b'], 0.4, 'raw-text'))
        self.assertEqual(degraded.message, "experience extraction degraded: 2 items, confidence 0.40")

        broken = build_health_report('experience', result([], 0.0, None))
        self.assertEqual(broken.status, HealthStatus.BROKEN)
        self.assertIsNone(broken.extractor)
        self.assertEqual(broken.to_dict()['status'], 'broken')


if __name__ == "__main__":
    unittest.main()
