from __future__ import annotations

import tempfile
from pathlib import Path

import fitz  # PyMuPDF
from typer.testing import CliRunner

from congregation.main import app
from congregation.models import get_session, get_setting

runner = CliRunner()


def test_set_config_rejects_unknown_setting() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        result = runner.invoke(app, ["set-config", "sNoSuchSetting", "1", "--out", temp_dir])
        assert result.exit_code != 0
        assert "Unknown setting" in result.output


def test_set_config_stores_value() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        result = runner.invoke(app, ["set-config", "iFYMonth", "7", "--out", temp_dir])
        assert result.exit_code == 0, result.output
        with get_session() as session:
            assert get_setting(session, "iFYMonth") == "7"


def test_import_then_voting_members_pdf() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        out_dir = Path(temp_dir) / "out"
        csv_path = Path(temp_dir) / "members.csv"
        csv_path.write_text(
            "family,first_name,last_name,classification\n"
            "Smith,Jo,Smith,Member\n"
            "Smith,Kim,Smith,Guest\n",
            encoding="utf-8",
        )

        result = runner.invoke(app, ["init-db", "--out", str(out_dir)])
        assert result.exit_code == 0, result.output

        result = runner.invoke(app, ["import-members", str(csv_path), "--out", str(out_dir)])
        assert result.exit_code == 0, result.output
        assert "Imported 1 families" in result.output

        pdf_path = Path(temp_dir) / "voting.pdf"
        result = runner.invoke(
            app,
            ["voting-members", "--out", str(out_dir), "--fy", "29", "--pdf", str(pdf_path)],
        )
        assert result.exit_code == 0, result.output
        assert "Voting members: 1" in result.output
        assert pdf_path.exists()
        with fitz.open(pdf_path) as doc:
            text = doc.load_page(0).get_text()
        assert "Jo Smith" in text
        assert "Number of Voting Members: 1" in text


def test_voting_members_defaults_to_timestamped_file() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        result = runner.invoke(app, ["voting-members", "--out", temp_dir])
        assert result.exit_code == 0, result.output
        assert "Voting members: 0" in result.output
        written = list(Path(temp_dir).glob("VotingMembers*.pdf"))
        assert len(written) == 1
