"""Document expiry classification and per-employee status aggregation."""
from datetime import date
from enum import Enum

from app.services.expiry_dates import days_until, parse_iso_date

CRITICAL_THRESHOLD_DAYS = 7
WARNING_THRESHOLD_DAYS = 30

# Tracked documents: display name -> employee attribute
DOCUMENT_FIELDS = {
    "Visa": "visa_expiry_date",
    "Health Card": "health_card_expiry_date",
    "Labour Card": "labour_card_expiry_date",
}


class Tier(str, Enum):
    """Severity of a document's proximity to expiry."""

    VALID = "VALID"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
    EXPIRED = "EXPIRED"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    Tier.VALID: 0,
    Tier.WARNING: 1,
    Tier.CRITICAL: 2,
    Tier.EXPIRED: 3,
}


def classify(expiry_date: str | date | None, today: date | None = None) -> Tier:
    """Classify a single expiry date.

    Missing or unparseable dates count as VALID so incomplete records do
    not raise alerts; use ``missing_documents`` to surface them.
    """
    expiry = parse_iso_date(expiry_date)
    if expiry is None:
        return Tier.VALID

    remaining = days_until(expiry, today)
    if remaining < 0:
        return Tier.EXPIRED
    if remaining <= CRITICAL_THRESHOLD_DAYS:
        return Tier.CRITICAL
    if remaining <= WARNING_THRESHOLD_DAYS:
        return Tier.WARNING
    return Tier.VALID


def aggregate(*tiers: Tier) -> Tier:
    """Return the most severe tier (VALID when called with nothing)."""
    return max(tiers, key=lambda tier: tier.severity, default=Tier.VALID)


def document_tiers(employee, today: date | None = None) -> dict[str, Tier]:
    """Tier for each tracked document of an employee."""
    if today is None:
        today = date.today()
    return {
        document: classify(getattr(employee, field, None), today)
        for document, field in DOCUMENT_FIELDS.items()
    }


def aggregate_status(employee, today: date | None = None) -> Tier:
    """Worst-case status across an employee's tracked documents."""
    return aggregate(*document_tiers(employee, today).values())


def missing_documents(employee) -> list[str]:
    """Tracked documents whose expiry date is absent or unparseable."""
    return [
        document
        for document, field in DOCUMENT_FIELDS.items()
        if parse_iso_date(getattr(employee, field, None)) is None
    ]
