"""
Shared test fixtures for the extraction engine test suite.
"""
from datetime import date

import pytest

from src.models.contributor import Contributor
from src.models.extraction_config import ExtractionConfig


FIXED_TODAY = date(2030, 1, 15)


# ==========================================================================
# Clock / config
# ==========================================================================

@pytest.fixture
def fixed_today():
    """Clock for the received-date fallback."""
    return lambda: FIXED_TODAY


@pytest.fixture
def config():
    return ExtractionConfig(enable_fuzzy_logging=False)


# ==========================================================================
# Contributor registry
# ==========================================================================

@pytest.fixture
def contributors():
    return [
        Contributor(id=1, name="Arun Kumar", email="arun.kumar@hepl.com"),
        Contributor(id=2, name="Priya Sharma", email="priya.sharma@hepl.com"),
        Contributor(id=3, name="Ravi Teja", email="ravi.teja@hepl.com", active=False),
        Contributor(id=4, name="Meena Iyer", email=None),
    ]


@pytest.fixture
def contributor_rows():
    """Registry rows as the caller's persistence layer would hand them over."""
    return [
        {"id": 1, "name": "Arun Kumar", "email": "arun.kumar@hepl.com", "active": True,
         "created_at": "2025-01-01T00:00:00"},
        {"id": 2, "name": "Priya Sharma", "email": "priya.sharma@hepl.com", "active": True},
    ]


# ==========================================================================
# Raw emails
# ==========================================================================

@pytest.fixture
def outlook_email():
    return (
        "From: Deepa Raman <deepa.raman@ckpl.in>\n"
        "Sent: Friday, July 11, 2025 1:14 PM\n"
        "To: Arun Kumar <arun.kumar@hepl.com>; support@hepl.com\n"
        "Cc: l3-team@hepl.com\n"
        "Subject: Urgent: HEPL Portal login failure\n"
        "\n"
        "Hi Team,\n"
        "\n"
        "Users cannot log in to the HEPL Portal since this morning. "
        "The login page shows an error after submitting credentials. "
        "This is blocking the payroll team. "
        "Please check on priority.\n"
        "\n"
        "Thanks & Regards,\n"
        "Deepa Raman\n"
        "Employee ID: 1015796\n"
        "Mob: 98765 432109\n"
    )


@pytest.fixture
def headerless_email():
    return "Payroll totals differ between reports."


@pytest.fixture
def subject_only_email():
    return (
        "From: Karthik S <karthik.s@hepl.com>\n"
        "To: team@hepl.com\n"
        "Date: 12 July 2025 10:26\n"
        "Subject: HEPL Portal password reset\n"
        "\n"
    )
