#!/usr/bin/env python3
"""
Built-in regression battery for the Carrier Intelligence Engine.

Runs a fixed set of known-good and known-bad cases against the seeded
catalog and reports pass/fail counts. Usable without a test framework:

    python -m carrier_intel
"""

import logging
import sys
from typing import TYPE_CHECKING

from .core.models import SelfTestReport, SeverityLevel, TrendClassification
from .core.severity import get_severity_level
from .modules.statistics import get_trend_classification

if TYPE_CHECKING:
    from .engine import CarrierIntelEngine

logger = logging.getLogger(__name__)

FUZZY_CASES: list[tuple[str, str, bool]] = [
    ("State Farm", "Roof Tear Off SQ", True),
    ("State Farm", "arch shingle tear off", True),
    ("State Farm", "ice water shield", True),
    ("State Farm", "steep pitch charge", True),
    ("State Farm", "valley flashing installation", True),
    ("State Farm", "completely unrelated garbage item xyz", False),
]


def run_self_tests(engine: "CarrierIntelEngine | None" = None) -> SelfTestReport:
    """
    Run the regression battery.

    Args:
        engine: Engine to test; defaults to a fresh engine over the seed catalog

    Returns:
        SelfTestReport with pass/fail counts and one line per check
    """
    if engine is None:
        from .engine import CarrierIntelEngine

        engine = CarrierIntelEngine()

    report = SelfTestReport()

    def record(name: str, ok: bool, detail: str) -> None:
        if ok:
            report.passed += 1
            report.results.append(f"{name} PASSED: {detail}")
        else:
            report.failed += 1
            report.results.append(f"{name} FAILED: {detail}")

    patterns = engine.get_carrier_patterns("State Farm")
    record(
        "Test 1",
        len(patterns) > 0,
        f"Found {len(patterns)} patterns for State Farm",
    )

    record(
        "Test 2",
        engine.get_carrier_patterns("Unknown Carrier XYZ") == [],
        "Unknown carrier returns no patterns",
    )

    severities = [get_severity_level(v) for v in (-55, -30, -15, -5, 0)]
    record(
        "Test 3",
        severities
        == [
            SeverityLevel.CRITICAL,
            SeverityLevel.HIGH,
            SeverityLevel.MEDIUM,
            SeverityLevel.LOW,
            SeverityLevel.NONE,
        ],
        "Severity levels calculated correctly",
    )

    stats = engine.get_carrier_stats("State Farm")
    record(
        "Test 4",
        stats is not None and stats.total_patterns > 0,
        (
            f"Carrier stats calculated ({stats.total_patterns} patterns, "
            f"{stats.trend_classification.value} trend)"
            if stats is not None
            else "No carrier stats for State Farm"
        ),
    )

    trends = [get_trend_classification(v) for v in (30, 20, 10, 3)]
    record(
        "Test 5",
        trends
        == [
            TrendClassification.PROBLEMATIC,
            TrendClassification.UNDERPAYS,
            TrendClassification.FAIR,
            TrendClassification.GENEROUS,
        ],
        "Trend classifications calculated correctly",
    )

    fuzzy_failures: list[str] = []
    for carrier, item, should_match in FUZZY_CASES:
        matched = engine.get_insight(carrier, item) is not None
        if matched != should_match:
            expected = "match" if should_match else "no match"
            got = "match" if matched else "no match"
            fuzzy_failures.append(f'"{item}" expected {expected}, got {got}')
    report.results.extend(f"Fuzzy case FAILED: {failure}" for failure in fuzzy_failures)
    record(
        "Test 6",
        not fuzzy_failures,
        f"{len(FUZZY_CASES) - len(fuzzy_failures)}/{len(FUZZY_CASES)} fuzzy matching cases",
    )

    logger.info("Self-tests: %d passed, %d failed", report.passed, report.failed)
    return report


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    report = run_self_tests()
    for line in report.results:
        print(line)
    print(f"\n{report.passed} passed, {report.failed} failed")
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
