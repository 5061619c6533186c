"""Tests for the scripted console walkthroughs."""

from datetime import datetime, timezone

import pytest

from console_demo import ConsoleSession, find_record
from menage.tools import catalog, reservations
from tests.conftest import make_record


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


class TestScenarios:
    def test_tapis_scenario_books_a_carpet(self, capsys):
        ConsoleSession().run_scenario("tapis")
        out = capsys.readouterr().out
        assert "Total: 150.00 DH" in out
        stored = reservations.list_reservations("tapis_canapes_reservations")
        assert len(stored) == 1
        assert stored[0].final_price == pytest.approx(150.0)

    def test_canape_scenario_shows_tiered_price(self, capsys):
        ConsoleSession().run_scenario("canape")
        out = capsys.readouterr().out
        assert "Total: 800.00 DH" in out
        assert "Total: 802.00 DH" in out

    def test_maison_dhote_scenario(self, capsys):
        ConsoleSession().run_scenario("maison_dhote")
        stored = reservations.list_reservations("menage_complet_reservations")
        assert len(stored) == 1
        # (12 + 10.5 + 80) m2 x 2 + 50 + 20
        assert stored[0].final_price == pytest.approx(275.0)
        assert stored[0].preferred_date == "2026-11-02"

    def test_failure_scenario_recovers(self, capsys):
        ConsoleSession().run_scenario("failure")
        out = capsys.readouterr().out
        assert "could not save your reservation" in out
        assert len(reservations.list_reservations("bureaux_usin_reservations")) == 1

    def test_unknown_scenario(self, capsys):
        ConsoleSession().run_scenario("jardinage")
        assert "Unknown scenario" in capsys.readouterr().out


class TestCommands:
    def test_unknown_command(self, capsys):
        ConsoleSession().handle("dance")
        assert "Unknown command" in capsys.readouterr().out

    def test_command_without_page(self, capsys):
        ConsoleSession().handle("toggle base")
        assert "open a booking page first" in capsys.readouterr().out

    def test_submit_incomplete_selection(self, capsys):
        session = ConsoleSession()
        session.handle("open carpet")
        session.handle("toggle carpet")
        session.handle("submit")
        assert "complete your selection" in capsys.readouterr().out
        assert reservations.list_reservations() == []

    def test_find_record(self):
        assert find_record("villa").id == 305
        assert find_record("not_a_label") is None

    def test_find_record_skips_records_the_page_drops(self):
        # The housekeeping page leaves pool records to the pool page
        newest = datetime(2030, 1, 1, tzinfo=timezone.utc)
        catalog.add_record(make_record("Villa avec piscine", record_id=991, menage_id=3, created_at=newest))
        assert find_record("villa").id == 305
