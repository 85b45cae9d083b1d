"""
End-to-end tests: raw email text → Ticket through the full pipeline.

Contributor registry and clock are injected; no environment is read except
through ExtractionConfig defaults.
"""
from datetime import date

import pytest

from src.config.constants import NO_IMPACT
from src.models.enums import BugType, Priority, Project, Status
from src.ticketing.pipeline import (
    ParseOutcome,
    TicketParseError,
    parse_email_to_ticket,
    parse_email_to_ticket_safe,
    parse_emails,
)
from src.ticketing.validation import validate_ticket


def _email(subject=None, to=None, sent_line=None, body=""):
    lines = ["From: Deepa Raman <deepa.raman@ckpl.in>"]
    if sent_line:
        lines.append(sent_line)
    if to:
        lines.append(f"To: {to}")
    if subject:
        lines.append(f"Subject: {subject}")
    return "\n".join(lines) + "\n\n" + body


class TestOutlookEmail:
    def test_full_ticket(self, outlook_email, contributors, config, fixed_today):
        ticket = parse_email_to_ticket(outlook_email, contributors, config, fixed_today)

        assert ticket.summary == "Urgent: HEPL Portal login failure"
        assert ticket.project == Project.HEPL_PORTAL
        assert ticket.priority == Priority.HIGH
        assert ticket.status == Status.OPENED
        assert ticket.received_date == date(2025, 7, 11)
        assert ticket.ticket_owner == "deepa raman"
        assert ticket.contributor.name == "Arun Kumar"
        assert ticket.contributor_name == "Arun Kumar"
        assert ticket.impact == (
            "The login page shows an error after submitting credentials. "
            "This is blocking the payroll team."
        )
        assert ticket.issue_description.startswith(
            "Subject: Urgent: HEPL Portal login failure\n\nDescription:\nHi Team,"
        )
        assert "Regards" not in ticket.issue_description

    def test_signature_enrichment(self, outlook_email, contributors, config, fixed_today):
        ticket = parse_email_to_ticket(outlook_email, contributors, config, fixed_today)
        assert ticket.employee_id == "1015796"
        assert ticket.employee_name == "Deepa Raman"
        # The phone number sits in the signature, after "Thanks & Regards,".
        assert ticket.contact == "98765 432109"

    def test_output_is_schema_valid(self, outlook_email, contributors, config, fixed_today):
        ticket = parse_email_to_ticket(outlook_email, contributors, config, fixed_today)
        assert validate_ticket(ticket) == []

    def test_deterministic(self, outlook_email, contributors, config, fixed_today):
        first = parse_email_to_ticket(outlook_email, contributors, config, fixed_today)
        second = parse_email_to_ticket(outlook_email, contributors, config, fixed_today)
        assert first.to_dict() == second.to_dict()

    def test_registry_rows_as_dicts(self, outlook_email, contributor_rows, config, fixed_today):
        ticket = parse_email_to_ticket(outlook_email, contributor_rows, config, fixed_today)
        assert ticket.contributor.id == 1


class TestDates:
    @pytest.mark.parametrize("sent_line,expected", [
        ("Sent On: 12 July 2025 10:26", date(2025, 7, 12)),
        ("Sent: Friday, July 11, 2025 1:14 PM", date(2025, 7, 11)),
        ("Date: Fri, 11 Jul 2025 13:14:00 +0530", date(2025, 7, 11)),
        ("Received Date: 05/07/2025", date(2025, 7, 5)),
    ])
    def test_sent_date(self, sent_line, expected, config, fixed_today):
        raw = _email(subject="Export issue", sent_line=sent_line, body="Export fails.")
        ticket = parse_email_to_ticket(raw, [], config, fixed_today)
        assert ticket.received_date == expected

    def test_unparseable_date_defaults_to_today(self, config, fixed_today):
        raw = _email(subject="Export issue", sent_line="Sent: garbage", body="Export fails.")
        warnings = []
        ticket = parse_email_to_ticket(raw, [], config, fixed_today, warnings)
        assert ticket.received_date == fixed_today()
        assert f"received_date defaulted to {fixed_today().isoformat()}" in warnings


class TestClassificationThroughPipeline:
    def test_typo_tolerant_subject(self, config, fixed_today):
        raw = _email(subject="Urgnt isue with CK Alumi portal")
        ticket = parse_email_to_ticket(raw, [], config, fixed_today)
        assert ticket.project == Project.CK_ALUMNI
        assert ticket.priority == Priority.HIGH
        assert ticket.bug_type == BugType.BUG

    def test_feature_request(self, config, fixed_today):
        raw = _email(subject="New feature for E-Capex", body="Please add a new feature.")
        ticket = parse_email_to_ticket(raw, [], config, fixed_today)
        assert ticket.project == Project.E_CAPEX
        assert ticket.bug_type == BugType.ENHANCEMENT


class TestRecoverableAbsence:
    def test_team_alias_leaves_ticket_unassigned(self, subject_only_email, contributors, config, fixed_today):
        ticket = parse_email_to_ticket(subject_only_email, contributors, config, fixed_today)
        assert ticket.contributor is None
        assert ticket.contributor_name is None

    def test_empty_body(self, subject_only_email, contributors, config, fixed_today):
        ticket = parse_email_to_ticket(subject_only_email, contributors, config, fixed_today)
        assert ticket.summary == "HEPL Portal password reset"
        assert ticket.impact == NO_IMPACT
        assert ticket.received_date == date(2025, 7, 12)
        assert ticket.project == Project.HEPL_PORTAL
        assert ticket.ticket_owner == "karthik s"

    def test_headerless_text(self, headerless_email, contributors, config, fixed_today):
        warnings = []
        ticket = parse_email_to_ticket(headerless_email, contributors, config, fixed_today, warnings)
        assert ticket.summary == "Payroll totals differ between reports."
        assert ticket.issue_description == "Description:\nPayroll totals differ between reports."
        assert ticket.project == Project.GENERAL
        assert ticket.priority == Priority.MODERATE
        assert ticket.bug_type == BugType.BUG
        assert ticket.received_date == fixed_today()
        assert ticket.ticket_owner == "Unknown"
        assert ticket.contributor is None
        assert "project defaulted to General" in warnings
        assert "priority defaulted to MODERATE" in warnings
        assert "bug_type defaulted to BUG" in warnings

    def test_headerless_everyday_sentence(self, config, fixed_today):
        ticket = parse_email_to_ticket("The page is slow to load for all users.", [], config, fixed_today)
        assert ticket.project == Project.FORM_BUILDER
        assert ticket.priority == Priority.LOW
        assert ticket.bug_type == BugType.TASK

    def test_ambiguous_contributor_warning(self, contributors, config, fixed_today):
        raw = _email(
            subject="Export issue",
            to="arun.kumar@hepl.com; priya.sharma@hepl.com",
            body="Export fails.",
        )
        warnings = []
        ticket = parse_email_to_ticket(raw, contributors, config, fixed_today, warnings)
        assert ticket.contributor is None
        assert any(w.startswith("ambiguous contributor match") for w in warnings)


class TestFailures:
    @pytest.mark.parametrize("raw", ["", "   \n\t", None])
    def test_empty_input_raises(self, raw, config):
        with pytest.raises(TicketParseError, match="empty"):
            parse_email_to_ticket(raw, [], config)

    def test_invalid_registry_raises(self, outlook_email, config):
        with pytest.raises(TicketParseError, match="Invalid contributor registry") as exc_info:
            parse_email_to_ticket(outlook_email, [{"id": 1}], config)
        assert exc_info.value.cause is not None

    def test_unexpected_error_is_wrapped(self, outlook_email, config, monkeypatch):
        def explode(**kwargs):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr("src.ticketing.pipeline.assemble_ticket", explode)
        with pytest.raises(TicketParseError) as exc_info:
            parse_email_to_ticket(outlook_email, [], config)
        assert isinstance(exc_info.value.cause, RuntimeError)
        assert "disk on fire" in exc_info.value.message

    def test_schema_violation_fails_the_parse(self, outlook_email, config, monkeypatch):
        monkeypatch.setattr(
            "src.ticketing.pipeline.validate_ticket", lambda ticket: ["summary: too long"]
        )
        with pytest.raises(TicketParseError, match="output validation"):
            parse_email_to_ticket(outlook_email, [], config)


class TestSafeAndBatch:
    def test_safe_success(self, outlook_email, contributors, config, fixed_today):
        outcome = parse_email_to_ticket_safe(outlook_email, contributors, config, fixed_today)
        assert isinstance(outcome, ParseOutcome)
        assert outcome.ok
        assert outcome.error is None
        assert outcome.to_dict()["ticket"]["project"] == "HEPL Portal"

    def test_safe_failure(self, config):
        outcome = parse_email_to_ticket_safe("", [], config)
        assert not outcome.ok
        assert outcome.ticket is None
        assert outcome.error == "Email content is empty"

    def test_safe_invalid_registry(self, outlook_email, config):
        outcome = parse_email_to_ticket_safe(outlook_email, [{"name": "No Id"}], config)
        assert not outcome.ok
        assert outcome.error.startswith("Invalid contributor registry")

    def test_batch(self, outlook_email, headerless_email, contributors, config, fixed_today):
        outcomes = parse_emails(["", outlook_email, headerless_email], contributors, config, fixed_today)
        assert [o.ok for o in outcomes] == [False, True, True]
        assert outcomes[1].ticket.contributor_name == "Arun Kumar"
        assert outcomes[2].ticket.received_date == fixed_today()

    def test_safe_without_registry(self, config, fixed_today):
        outcome = parse_email_to_ticket_safe("Subject: x\n\nbody", None, config, fixed_today)
        assert outcome.ok
        assert outcome.ticket.contributor is None

    def test_safe_non_text_input(self, config):
        outcome = parse_email_to_ticket_safe(b"Subject: x\n\nbody", [], config)
        assert not outcome.ok
        assert outcome.error.startswith("Email content must be text")

    def test_safe_out_of_range_configured_threshold(self, outlook_email, monkeypatch):
        from src.config import settings
        monkeypatch.setattr(settings, "FUZZY_PROJECT_SIMILARITY_THRESHOLD", 1.5)
        outcome = parse_email_to_ticket_safe(outlook_email, [])
        assert not outcome.ok
        assert outcome.error.startswith("Invalid extraction configuration")

    def test_batch_with_out_of_range_configured_threshold(self, outlook_email, monkeypatch):
        from src.config import settings
        monkeypatch.setattr(settings, "FUZZY_PRIORITY_SIMILARITY_THRESHOLD", -0.2)
        outcomes = parse_emails([outlook_email, outlook_email])
        assert [o.ok for o in outcomes] == [False, False]


class TestContactFromSignature:
    def test_phone_after_closing_salutation(self, config, fixed_today):
        raw = _email(
            subject="Portal outage",
            to="arun.kumar@hepl.com",
            body="Portal is down.\n\nRegards,\nA B\nMob: 9876543210\n",
        )
        ticket = parse_email_to_ticket(raw, [], config, fixed_today)
        assert ticket.contact == "9876543210"
        assert "9876543210" not in ticket.issue_description

    def test_header_addresses_are_never_the_contact(self, config, fixed_today):
        raw = _email(subject="Portal outage", to="arun.kumar@hepl.com", body="Portal is down.")
        ticket = parse_email_to_ticket(raw, [], config, fixed_today)
        assert ticket.contact is None

    def test_signature_address_when_no_phone(self, config, fixed_today):
        raw = _email(
            subject="Portal outage",
            body="Portal is down.\n\nThanks & Regards,\nA B\nhelpdesk@ckpl.in\n",
        )
        ticket = parse_email_to_ticket(raw, [], config, fixed_today)
        assert ticket.contact == "helpdesk@ckpl.in"
