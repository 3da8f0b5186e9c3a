"""
Reporting modules for the Carrier Intelligence Engine.
"""

from .risk_report import PortfolioFormatter, RiskReportFormatter, severity_counts

__all__ = [
    "PortfolioFormatter",
    "RiskReportFormatter",
    "severity_counts",
]
