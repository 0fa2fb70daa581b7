"""
JSON envelope helpers

Every API response has the shape {"success": bool, "data"?: ..., "message"?: str}.
"""

from flask import jsonify


def success_response(data=None, message=None, status=200, **extra):
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    body.update(extra)
    return jsonify(body), status


def error_response(message, status):
    return jsonify({'success': False, 'message': message}), status
