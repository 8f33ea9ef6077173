"""
Admin routes: creator list + CSV export, guarded by the static X-Admin-Token header.
"""
import csv
import hmac
import io
import logging
from functools import wraps

from flask import Blueprint, Response, jsonify, redirect, request

from creatorfit import config
from creatorfit.database import get_session
from creatorfit.services.audit import log_audit
from creatorfit.services.db import EXPORT_COLUMNS, export_rows, list_creators

logger = logging.getLogger('routes.admin')

bp = Blueprint('admin', __name__)


def admin_required(view):
    """401 unless X-Admin-Token matches ADMIN_TOKEN. No token configured = locked."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        expected = config.ADMIN_TOKEN
        supplied = request.headers.get('X-Admin-Token', '')
        if not expected or not hmac.compare_digest(supplied.encode(), expected.encode()):
            return jsonify({'error': 'unauthorized'}), 401
        return view(*args, **kwargs)
    return wrapper


@bp.route('/api/admin/creators')
@admin_required
def admin_creators():
    grade = request.args.get('grade') or None
    city = request.args.get('city') or None

    session = get_session()
    try:
        rows = list_creators(session, grade=grade, city=city)
        log_audit(session, 'admin', 'admin', 'ADMIN_LIST', 'creator', '*',
                  {'grade': grade, 'city': city, 'count': len(rows)})
        session.commit()
        return jsonify({'rows': rows})
    except Exception:
        session.rollback()
        logger.error("Admin list failed", exc_info=True)
        return jsonify({'error': 'internal_error'}), 500
    finally:
        session.close()


@bp.route('/api/admin/export.csv')
@admin_required
def admin_export():
    session = get_session()
    try:
        rows = export_rows(session)
        log_audit(session, 'admin', 'admin', 'ADMIN_EXPORT', 'creator', '*', {'count': len(rows)})
        session.commit()
    except Exception:
        session.rollback()
        logger.error("Admin export failed", exc_info=True)
        return jsonify({'error': 'internal_error'}), 500
    finally:
        session.close()

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(EXPORT_COLUMNS)
    for row in rows:
        writer.writerow(['' if value is None else value for value in row])

    return Response(
        output.getvalue(),
        mimetype='text/csv',
        headers={'Content-Disposition': 'attachment; filename=creators.csv'},
    )


@bp.route('/admin')
def admin_page():
    return redirect('/admin.html')
