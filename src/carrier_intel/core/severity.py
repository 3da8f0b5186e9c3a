"""
Severity classification and user-facing messaging.

Severity is a function of the variance alone. Confidence is reported next
to it, never folded into it.
"""

from .models import SeverityLevel

# (minimum absolute variance, severity), most severe first
SEVERITY_THRESHOLDS: list[tuple[float, SeverityLevel]] = [
    (50, SeverityLevel.CRITICAL),
    (25, SeverityLevel.HIGH),
    (10, SeverityLevel.MEDIUM),
]

WARNING_TEMPLATES: dict[SeverityLevel, str] = {
    SeverityLevel.CRITICAL: (
        'CRITICAL: {carrier} historically underpays "{item}" by {percentage}%. '
        "This is a major red flag. Include extensive documentation, "
        "contractor quotes, and photos."
    ),
    SeverityLevel.HIGH: (
        'HIGH RISK: Historical data shows {carrier} underpays "{item}" by {percentage}%. '
        "Ensure detailed photographic evidence and labor documentation are included."
    ),
    SeverityLevel.MEDIUM: (
        'MEDIUM RISK: {carrier} typically underpays "{item}" by {percentage}%. '
        "Provide additional documentation to support your claim."
    ),
    SeverityLevel.LOW: (
        'Note: {carrier} sometimes underpays "{item}" by {percentage}%. '
        "Monitor this during negotiations."
    ),
    SeverityLevel.NONE: "No historical underpayment trend for this item from {carrier}.",
}

RECOMMENDATION_TEMPLATES: dict[SeverityLevel, str] = {
    SeverityLevel.CRITICAL: (
        'PRIORITY ACTION: Gather extensive documentation for "{item}" - photos from '
        "multiple angles, contractor estimates, labor rates. Consider hiring a "
        "public adjuster or attorney."
    ),
    SeverityLevel.HIGH: (
        'RECOMMENDED: Provide detailed photographic evidence of "{item}" and current '
        "local market rates. Have a professional contractor review for accuracy."
    ),
    SeverityLevel.MEDIUM: (
        'Recommended: Include photos and any contractor quotes for "{item}" '
        "to strengthen your claim."
    ),
    SeverityLevel.LOW: (
        'Monitor: Include standard documentation for "{item}" as part of normal '
        "claim process."
    ),
    SeverityLevel.NONE: 'Standard documentation for "{item}" should be sufficient.',
}

SEVERITY_FLAGS: dict[SeverityLevel, str] = {
    SeverityLevel.CRITICAL: "[!!!]",
    SeverityLevel.HIGH: "[!!]",
    SeverityLevel.MEDIUM: "[!]",
    SeverityLevel.LOW: "[-]",
    SeverityLevel.NONE: "[ok]",
}


def get_severity_level(variance: float) -> SeverityLevel:
    """Classify an underpayment variance by its magnitude."""
    magnitude = abs(variance)
    for floor, severity in SEVERITY_THRESHOLDS:
        if magnitude >= floor:
            return severity
    if magnitude > 0:
        return SeverityLevel.LOW
    return SeverityLevel.NONE


def format_percentage(variance: float) -> str:
    """Whole-number percentage magnitude used in messages."""
    return f"{abs(variance):.0f}"


def generate_warning_message(
    carrier: str, item: str, variance: float, severity: SeverityLevel
) -> str:
    """Build the warning shown next to a flagged line item."""
    return WARNING_TEMPLATES[severity].format(
        carrier=carrier, item=item, percentage=format_percentage(variance)
    )


def generate_recommendation(severity: SeverityLevel, item: str) -> str:
    """Build the recommended action for a line item."""
    return RECOMMENDATION_TEMPLATES[severity].format(item=item)


def get_severity_flag(severity: SeverityLevel) -> str:
    """Short text marker for a severity, used in plain-text reports."""
    return SEVERITY_FLAGS[severity]
