from datetime import timedelta

from flask import Blueprint, jsonify, request
from flask_login import login_required

from retail.presentation.routes.api_helpers import arg_date, handle_error, today
from retail.services.reports.report_service import ReportService

bp = Blueprint('reports', __name__)


@bp.get('/reports/dashboard')
@login_required
def dashboard():
    return jsonify(ReportService.dashboard(today()))


@bp.get('/reports/daily')
@login_required
def daily():
    try:
        day = arg_date('date', today())
        summary = ReportService.daily_report(day)
    except Exception as e:
        return handle_error(e, "building daily report")
    return jsonify(dict(summary.to_dict(), date=day.isoformat()))


@bp.get('/reports/monthly')
@login_required
def monthly():
    current = today()
    try:
        year = request.args.get('year', current.year, type=int)
        month = request.args.get('month', current.month, type=int)
        summary = ReportService.monthly_report(year, month)
    except Exception as e:
        return handle_error(e, "building monthly report")
    return jsonify(dict(summary.to_dict(), year=year, month=month))


@bp.get('/reports/top-products')
@login_required
def top_products():
    """Defaults to the current month to date (end is exclusive, so tomorrow)."""
    current = today()
    try:
        start = arg_date('start', current.replace(day=1))
        end = arg_date('end', current + timedelta(days=1))
        limit = request.args.get('limit', 5, type=int)
        products = ReportService.top_products(start, end, limit)
    except Exception as e:
        return handle_error(e, "building top products report")
    return jsonify({'start': start.isoformat(), 'end': end.isoformat(), 'products': products})
