"""Congregation web endpoints.

Report forms post here; the PDF is returned either as a download or inline
depending on the stored ``iPDFOutputType`` setting.
"""

from __future__ import annotations

import io
import logging

from flask import Flask, request, send_file
from flask import session as web_session

from . import config
from .models import get_session, get_setting, init_db
from .reports.fiscal import parse_fiscal_year, parse_int
from .reports.voting_members import DataAccessError, VotingMemberFilter, build_voting_members_report

logger = logging.getLogger(__name__)

flask_app = Flask(__name__)
flask_app.config["SECRET_KEY"] = config.SECRET_KEY
flask_app.config["SESSION_COOKIE_HTTPONLY"] = True
flask_app.config["SESSION_COOKIE_SAMESITE"] = "Lax"


@flask_app.before_request
def setup_request():
    # Health probes must not depend on the database.
    if request.path in {"/healthz"}:
        return None
    init_db()


@flask_app.route("/healthz")
def healthz():
    return {"status": "ok"}


@flask_app.errorhandler(DataAccessError)
def report_failed(exc: DataAccessError):
    logger.error("Report generation failed: %s", exc, exc_info=exc)
    return "Report generation failed", 500


@flask_app.route("/reports/voting-members", methods=["POST"])
def voting_members_report():
    with get_session() as session:
        fy_month = int(get_setting(session, "iFYMonth"))
        fy_id = parse_fiscal_year(request.form.get("FYID"), fy_month)
        web_session["idefaultFY"] = fy_id
        voting_filter = VotingMemberFilter(
            fiscal_year_id=fy_id,
            required_donation_years=parse_int(request.form.get("RequireDonationYears")),
        )
        report = build_voting_members_report(session, voting_filter)

    return send_file(
        io.BytesIO(report.content),
        mimetype="application/pdf",
        as_attachment=report.as_attachment,
        download_name=report.filename,
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    flask_app.run(debug=False)
