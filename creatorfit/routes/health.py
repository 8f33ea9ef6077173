"""
Health routes: liveness probe + circuit breaker states.
"""
from flask import Blueprint, jsonify

from creatorfit.routes.admin import admin_required
from creatorfit.services.circuit_breaker import get_all_breakers

bp = Blueprint('health', __name__)


@bp.route('/health')
def health_check():
    return jsonify({'status': 'healthy'}), 200


@bp.route('/api/health')
def api_health():
    breakers = get_all_breakers()
    return jsonify({'services': {name: cb.get_health() for name, cb in breakers.items()}})


@bp.route('/api/health/<service>/reset', methods=['POST'])
@admin_required
def reset_circuit(service):
    breaker = get_all_breakers().get(service)
    if breaker is None:
        return jsonify({'error': f'Unknown service: {service}'}), 404
    breaker.reset()
    return jsonify({'ok': True, 'service': service, 'state': breaker.state})
