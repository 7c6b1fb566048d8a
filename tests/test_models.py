"""Tests for winadmin.models: records, outcomes, health snapshot."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import SecretStr, ValidationError

from winadmin.models import CleanupEntry, HealthSnapshot, Outcome, OutcomeKind, UserRecord
from winadmin.models.health import to_gb, usage_percent


# ── UserRecord / CleanupEntry ─────────────────────────

class TestUserRecord:
    def test_accepts_csv_headers_and_field_names(self):
        a = UserRecord(UserName="jdoe", FirstName="Jane")
        b = UserRecord(username="jdoe", first_name="Jane")
        assert a == b

    def test_full_name_keeps_trailing_space(self):
        assert UserRecord(UserName="jdoe", FirstName="Jane").full_name == "Jane "

    def test_none_cells_become_empty(self):
        record = UserRecord.model_validate({"UserName": " jdoe ", "Department": None})
        assert record.username == "jdoe"
        assert record.department == ""

    def test_username_required(self):
        with pytest.raises(ValidationError):
            UserRecord(FirstName="Jane")


class TestCleanupEntry:
    def test_strips(self):
        assert CleanupEntry(UserName="  bob\t").username == "bob"


# ── Outcome ───────────────────────────────────────────

class TestOutcome:
    def test_kind_values(self):
        assert {k.value for k in OutcomeKind} == {
            "CREATED", "SKIPPED", "ERROR", "SKIP",
            "PROFILE REMOVED", "WARNING", "ACCOUNT DELETED",
        }

    def test_created_render(self):
        o = Outcome.created("jdoe", "Jane Doe", "Eng", "P@ssw0rd!")
        assert o.render() == "CREATED: jdoe (Jane Doe) Dept=Eng (password: P@ssw0rd!)"

    def test_created_redacted(self):
        o = Outcome.created("jdoe", "Jane Doe", "Eng", "P@ssw0rd!")
        assert o.render(redact=True) == "CREATED: jdoe (Jane Doe) Dept=Eng (password: <redacted>)"
        assert "P@ssw0rd!" not in repr(o)

    def test_secret_is_secretstr(self):
        assert isinstance(Outcome.created("a", "b", "c", "d").secret, SecretStr)

    def test_skipped_and_not_found(self):
        assert Outcome.skipped("jdoe").render() == "SKIPPED: jdoe already exists"
        assert Outcome.not_found("ghost").render() == "SKIP: ghost not found"

    def test_error(self):
        o = Outcome.error("jdoe", "Access is denied.")
        assert o.render() == "ERROR: jdoe -> Access is denied."
        assert o.final is True
        assert Outcome.error("jdoe", "x", final=False).final is False


# ── HealthSnapshot ────────────────────────────────────

class TestHealthSnapshot:
    def test_helpers(self):
        assert to_gb(1024 ** 3 * 1.5) == 1.5
        assert usage_percent(1, 3) == 33.3
        assert usage_percent(5, 0) == 0.0

    def test_frozen(self):
        snap = HealthSnapshot(host="PC", user="me")
        with pytest.raises(ValidationError):
            snap.cpu_percent = 5.0

    def test_unavailable_defaults_render_na(self):
        snap = HealthSnapshot(timestamp=datetime(2026, 1, 2, 3, 4, 5), host="PC", user="me")
        report = snap.render_report()

        assert "Time:            2026-01-02 03:04:05" in report
        assert "CPU:             n/a" in report
        assert "Memory:          n/a" in report
        assert "Default gateway: n/a" in report
        assert "Ping 8.8.8.8:    FAILED" in report

    def test_row_columns(self):
        row = HealthSnapshot(host="PC", user="me", cpu_percent=3.5).to_row()
        assert list(row)[:4] == ["Timestamp", "Host", "User", "CPU_Percent"]
        assert row["CPU_Percent"] == 3.5
        assert row["Disk_Percent"] == ""
        assert row["Public_IP"] == ""
