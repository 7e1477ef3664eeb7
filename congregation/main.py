from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from . import config
from .ingest import ensure_classifications, ingest_members
from .models import get_session, get_setting, init_db, reset_engine, set_setting
from .reports.fiscal import parse_fiscal_year
from .reports.voting_members import VotingMemberFilter, build_voting_members_report

app = typer.Typer(help="Congregation records and reports")


def _use_out_dir(out: Optional[Path]) -> None:
    if out:
        config.set_out_dir(out)
        reset_engine()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at INFO level")) -> None:
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)


@app.command("init-db")
def init_db_command(
    out: Optional[Path] = typer.Option(None, "--out", help="Data directory"),
) -> None:
    _use_out_dir(out)
    init_db()
    ensure_classifications()
    typer.echo(f"Database ready at {config.DB_PATH}")


@app.command("import-members")
def import_members(
    csv: Path = typer.Argument(..., help="CSV with family, first_name, last_name, classification"),
    out: Optional[Path] = typer.Option(None, "--out", help="Data directory"),
) -> None:
    _use_out_dir(out)
    families = ingest_members(csv)
    typer.echo(f"Imported {len(families)} families")


@app.command("set-config")
def set_config(
    name: str = typer.Argument(..., help="Setting name, e.g. iFYMonth"),
    value: str = typer.Argument(...),
    out: Optional[Path] = typer.Option(None, "--out", help="Data directory"),
) -> None:
    _use_out_dir(out)
    if name not in config.SYSTEM_CONFIG_DEFAULTS:
        raise typer.BadParameter(f"Unknown setting: {name}")
    init_db()
    with get_session() as session:
        set_setting(session, name, value)
    typer.echo(f"{name} = {value}")


@app.command("voting-members")
def voting_members(
    fy: str = typer.Option("", "--fy", help="Fiscal year id (defaults to the current one)"),
    years: int = typer.Option(0, "--years", help="Consecutive donation years required, 0 to disable"),
    out: Optional[Path] = typer.Option(None, "--out", help="Data directory"),
    pdf: Optional[Path] = typer.Option(None, "--pdf", help="Where to write the PDF"),
) -> None:
    _use_out_dir(out)
    init_db()
    with get_session() as session:
        fy_id = parse_fiscal_year(fy, int(get_setting(session, "iFYMonth")))
        report = build_voting_members_report(session, VotingMemberFilter(fy_id, years))
    target = pdf or config.OUT_DIR / report.filename
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(report.content)
    typer.echo(f"Voting members: {report.member_count}")
    typer.echo(f"Wrote {target}")


if __name__ == "__main__":
    app()
