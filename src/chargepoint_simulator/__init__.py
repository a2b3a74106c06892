"""Chargepoint demand simulator — yearly 15-minute load estimate for EV charging bays."""

__version__ = "1.0.0"
