"""
Seed catalog of carrier underpayment patterns.

Historical patterns by major carriers, compiled from claims analysis and
industry reports. Loaded into a repository at startup.
"""

from typing import Any

from ..core.models import CarrierPattern

CARRIER_TRENDS_DATA: list[dict[str, Any]] = [
    # State Farm
    {
        "carrier_name": "State Farm",
        "line_item_description": "Valley Flashing",
        "underpayment_rate": -12,
        "frequency": 0.45,
        "typical_gaps": ["Valley Flashing", "Drip Edge", "Lead Boots"],
        "common_strategy": "OMIT",
        "historical_count": 247,
        "confidence": 92,
    },
    {
        "carrier_name": "State Farm",
        "line_item_description": "Steep Roof Charge",
        "underpayment_rate": -35,
        "frequency": 0.62,
        "typical_gaps": ["Steep Charge Modifier", "Labor Adjustment"],
        "common_strategy": "DENY_MODIFIER",
        "historical_count": 312,
        "confidence": 95,
    },
    {
        "carrier_name": "State Farm",
        "line_item_description": "Permit / Inspection",
        "underpayment_rate": -100,
        "frequency": 0.98,
        "typical_gaps": ["Permit", "Code Upgrade", "Inspection Fee"],
        "common_strategy": "OMIT",
        "historical_count": 189,
        "confidence": 99,
    },
    {
        "carrier_name": "State Farm",
        "line_item_description": "Ice & Water Shield",
        "underpayment_rate": -25,
        "frequency": 0.55,
        "typical_gaps": ["Ice Dam Protection", "Underlayment Premium"],
        "common_strategy": "UNDERVALUE",
        "historical_count": 156,
        "confidence": 88,
    },
    {
        "carrier_name": "State Farm",
        "line_item_description": "Haul Off / Debris Removal",
        "underpayment_rate": -40,
        "frequency": 0.72,
        "typical_gaps": ["Debris Removal", "Dumpster Rental", "Disposal Fee"],
        "common_strategy": "UNDERVALUE",
        "historical_count": 203,
        "confidence": 91,
    },
    {
        "carrier_name": "State Farm",
        "line_item_description": "Roof Tear Off",
        "underpayment_rate": -30,
        "frequency": 0.5,
        "typical_gaps": ["Shingle Tear Off", "Additional Layer Removal"],
        "common_strategy": "UNDERVALUE",
        "historical_count": 228,
        "confidence": 90,
    },
    # Allstate
    {
        "carrier_name": "Allstate",
        "line_item_description": "Power Attic Vent",
        "underpayment_rate": -25,
        "frequency": 0.38,
        "typical_gaps": ["Power Attic Vent", "Soffit Vents", "Ridge Vents"],
        "common_strategy": "OMIT",
        "historical_count": 134,
        "confidence": 85,
    },
    {
        "carrier_name": "Allstate",
        "line_item_description": "Soffit Vents",
        "underpayment_rate": -30,
        "frequency": 0.42,
        "typical_gaps": ["Soffit Ventilation", "Intake Vents"],
        "common_strategy": "OMIT",
        "historical_count": 98,
        "confidence": 82,
    },
    {
        "carrier_name": "Allstate",
        "line_item_description": "Labor Modifications",
        "underpayment_rate": -18,
        "frequency": 0.55,
        "typical_gaps": ["Second Story Access", "Steep Pitch Labor"],
        "common_strategy": "DENY_MODIFIER",
        "historical_count": 167,
        "confidence": 87,
    },
    {
        "carrier_name": "Allstate",
        "line_item_description": "Gutters",
        "underpayment_rate": -22,
        "frequency": 0.48,
        "typical_gaps": ["Gutter Guards", "Downspouts", "Gutter Replacement"],
        "common_strategy": "UNDERVALUE",
        "historical_count": 145,
        "confidence": 84,
    },
    # Liberty Mutual
    {
        "carrier_name": "Liberty Mutual",
        "line_item_description": "Lead Boots",
        "underpayment_rate": -45,
        "frequency": 0.65,
        "typical_gaps": ["Pipe Flashing", "Lead Boot Replacement"],
        "common_strategy": "OMIT",
        "historical_count": 178,
        "confidence": 90,
    },
    {
        "carrier_name": "Liberty Mutual",
        "line_item_description": "Flashing",
        "underpayment_rate": -28,
        "frequency": 0.58,
        "typical_gaps": ["Step Flashing", "Counter Flashing", "Wall Flashing"],
        "common_strategy": "UNDERVALUE",
        "historical_count": 212,
        "confidence": 89,
    },
    {
        "carrier_name": "Liberty Mutual",
        "line_item_description": "Underlayment Premium",
        "underpayment_rate": -20,
        "frequency": 0.52,
        "typical_gaps": ["Synthetic Underlayment", "Premium Felt"],
        "common_strategy": "UNDERVALUE",
        "historical_count": 123,
        "confidence": 83,
    },
    {
        "carrier_name": "Liberty Mutual",
        "line_item_description": "Material Tax",
        "underpayment_rate": -100,
        "frequency": 0.85,
        "typical_gaps": ["Sales Tax", "Material Tax"],
        "common_strategy": "ZERO_COST",
        "historical_count": 289,
        "confidence": 96,
    },
    # Progressive
    {
        "carrier_name": "Progressive",
        "line_item_description": "Permitting",
        "underpayment_rate": -100,
        "frequency": 0.92,
        "typical_gaps": ["Building Permit", "Inspection Fee"],
        "common_strategy": "OMIT",
        "historical_count": 156,
        "confidence": 94,
    },
    {
        "carrier_name": "Progressive",
        "line_item_description": "Steep Charges",
        "underpayment_rate": -50,
        "frequency": 0.68,
        "typical_gaps": ["Steep Pitch Premium", "Safety Equipment"],
        "common_strategy": "DENY_MODIFIER",
        "historical_count": 134,
        "confidence": 88,
    },
    {
        "carrier_name": "Progressive",
        "line_item_description": "Waste Factor",
        "underpayment_rate": -15,
        "frequency": 0.75,
        "typical_gaps": ["Material Waste", "Cutting Waste"],
        "common_strategy": "UNDERVALUE",
        "historical_count": 198,
        "confidence": 85,
    },
    # Farmers
    {
        "carrier_name": "Farmers",
        "line_item_description": "Drip Edge",
        "underpayment_rate": -35,
        "frequency": 0.58,
        "typical_gaps": ["Drip Edge", "Edge Metal"],
        "common_strategy": "OMIT",
        "historical_count": 112,
        "confidence": 82,
    },
    {
        "carrier_name": "Farmers",
        "line_item_description": "Starter Shingles",
        "underpayment_rate": -22,
        "frequency": 0.48,
        "typical_gaps": ["Starter Strip", "Starter Course"],
        "common_strategy": "UNDERVALUE",
        "historical_count": 89,
        "confidence": 78,
    },
    # USAA
    {
        "carrier_name": "USAA",
        "line_item_description": "Ridge Caps",
        "underpayment_rate": -18,
        "frequency": 0.35,
        "typical_gaps": ["Hip & Ridge", "Cap Shingles"],
        "common_strategy": "UNDERVALUE",
        "historical_count": 76,
        "confidence": 80,
    },
    {
        "carrier_name": "USAA",
        "line_item_description": "Ventilation",
        "underpayment_rate": -25,
        "frequency": 0.42,
        "typical_gaps": ["Ridge Vent", "Box Vents", "Turbine Vents"],
        "common_strategy": "OMIT",
        "historical_count": 94,
        "confidence": 83,
    },
]


def load_seed_patterns() -> list[CarrierPattern]:
    """Validate the seed catalog into fresh CarrierPattern instances."""
    return [CarrierPattern.model_validate(record) for record in CARRIER_TRENDS_DATA]
