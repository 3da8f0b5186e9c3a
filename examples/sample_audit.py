#!/usr/bin/env python3
"""
Sample Audit Script.
Demonstrates usage of the Carrier Intelligence Engine.
"""

import logging

from carrier_intel import CarrierIntelEngine, PortfolioFormatter, RiskReportFormatter

CLAIM_ITEMS = [
    "Roof Tear Off SQ",
    "Arch shingle - laminated",
    "Ice & water shield",
    "Steep pitch charge 7/12-9/12",
    "Valley flashing installation",
    "Permit fee",
    "Dumpster rental 30yd",
    "Satellite dish detach & reset",
]

AUDIT_RESULTS = [
    {"carrier": "State Farm", "itemName": "Roof Tear Off", "claimPrice": 5400, "marketPrice": 7200},
    {"carrier": "State Farm", "itemName": "Permit / Inspection", "claimPrice": 0, "marketPrice": 450},
    {"carrier": "State Farm", "itemName": "Skylight Flashing", "claimPrice": 180, "marketPrice": 240},
]


def main() -> None:
    """Run a sample claim through the engine and feed back audit results."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("Initializing Carrier Intelligence Engine...")
    engine = CarrierIntelEngine()

    print("Analyzing claim...")
    batch = engine.get_insights("State Farm", CLAIM_ITEMS)
    report = RiskReportFormatter(batch)

    print()
    print(report.to_text())

    print()
    print("Flagged items:")
    print(report.to_dataframe().to_string(index=False))

    analysis = engine.analyze_claim("State Farm", CLAIM_ITEMS)
    print()
    print(f"Quick scan matched {len(analysis.matched_patterns)} patterns")
    for recommendation in analysis.recommendations:
        print(f"  - {recommendation}")

    print()
    print("Recording audit results...")
    for result in engine.trend_updater.update_many(AUDIT_RESULTS):
        verb = "Created" if result.created else "Updated"
        print(f"  {verb}: variance {result.new_variance}% over {result.sample_size} samples")

    print()
    print(PortfolioFormatter(engine.get_overall_stats()).to_text())


if __name__ == "__main__":
    main()
