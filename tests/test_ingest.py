from __future__ import annotations

import csv
import tempfile
from pathlib import Path

import pytest
from sqlmodel import select

from congregation import config
from congregation.ingest import ingest_members, load_rows
from congregation.models import Person, Pledge, get_session, reset_engine
from congregation.reports.voting_members import VotingMemberFilter, select_voting_families


def _write_csv(path: Path, rows: list[dict]) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(
            handle,
            fieldnames=["family", "first_name", "last_name", "classification", "last_payment"],
        )
        writer.writeheader()
        writer.writerows(rows)


def test_import_then_select_voting_families() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        config.set_out_dir(Path(temp_dir) / "out")
        reset_engine()
        csv_path = Path(temp_dir) / "members.csv"
        _write_csv(
            csv_path,
            [
                {"family": "Smith", "first_name": "Jo", "last_name": "Smith", "classification": "Member", "last_payment": "2024-03-01"},
                {"family": "Smith", "first_name": "Kim", "last_name": "Smith", "classification": "Guest", "last_payment": ""},
                {"family": "Jones", "first_name": "Lee", "last_name": "Jones", "classification": "Deceased", "last_payment": ""},
            ],
        )
        families = ingest_members(csv_path)
        assert sorted(family.name for family in families) == ["Jones", "Smith"]

        with get_session() as session:
            assert len(session.exec(select(Person)).all()) == 3
            assert len(session.exec(select(Pledge)).all()) == 1
            voting = list(select_voting_families(session, VotingMemberFilter(29), fy_month=1))

        by_name = {family.name: family for family in voting}
        assert [m.full_name for m in by_name["Smith"].members] == ["Jo Smith"]
        assert by_name["Jones"].members == ()


def test_load_rows_rejects_missing_columns() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        csv_path = Path(temp_dir) / "members.csv"
        csv_path.write_text("family,first_name\nSmith,Jo\n", encoding="utf-8")
        with pytest.raises(ValueError, match="classification, last_name"):
            load_rows(csv_path)


def test_unknown_classification_is_rejected() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        config.set_out_dir(Path(temp_dir) / "out")
        reset_engine()
        csv_path = Path(temp_dir) / "members.csv"
        _write_csv(
            csv_path,
            [{"family": "Smith", "first_name": "Jo", "last_name": "Smith", "classification": "Elder", "last_payment": ""}],
        )
        with pytest.raises(ValueError, match="Unknown classification"):
            ingest_members(csv_path)
