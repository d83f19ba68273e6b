"""
Request parsing helpers for the JSON API

Malformed query or body values become InvalidInputError, which the API
error handler turns into a 400.
"""

from flask import request
from flask_login import current_user
from itam.buisness.lifecycle.caller import Caller
from itam.buisness.lifecycle.errors import InvalidInputError
from itam.buisness.lifecycle.policies.asset_fields import AssetFieldPolicy

TRUE_VALUES = ('true', '1', 'yes', 'on')
FALSE_VALUES = ('false', '0', 'no', 'off')


def current_caller() -> Caller:
    return Caller.from_user(current_user)


def json_body(required: bool = True) -> dict:
    data = request.get_json(silent=True)
    if data is None and not required:
        return {}
    if not isinstance(data, dict):
        raise InvalidInputError("Request body must be a JSON object")
    return data


def body_value(data: dict, name: str, alias: str = None, default=None):
    if name in data:
        return data[name]
    if alias and alias in data:
        return data[alias]
    return default


def arg_int(name: str, alias: str = None):
    raw = request.args.get(name)
    if raw is None and alias:
        raw = request.args.get(alias)
    if raw is None or raw == '':
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidInputError(f"{name} must be an integer", field=name)


def arg_bool(name: str, alias: str = None):
    raw = request.args.get(name)
    if raw is None and alias:
        raw = request.args.get(alias)
    if raw is None or raw == '':
        return None
    lowered = raw.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise InvalidInputError(f"{name} must be true or false", field=name)


def arg_enum(name: str, enum_cls):
    raw = request.args.get(name)
    if raw is None or raw == '':
        return None
    return AssetFieldPolicy.parse_enum(enum_cls, raw, name)


def arg_datetime(name: str, alias: str = None, start_of_day: bool = False):
    """A bare date means the end of that day unless start_of_day is set"""
    raw = request.args.get(name)
    if raw is None and alias:
        raw = request.args.get(alias)
    if raw is None or raw == '':
        return None
    value = AssetFieldPolicy.parse_datetime(raw, name)
    if start_of_day and 'T' not in raw and ' ' not in raw.strip():
        value = value.replace(hour=0, minute=0, second=0, microsecond=0)
    return value


def page_args():
    return {
        'page': arg_int('page'),
        'page_size': arg_int('page_size', 'pageSize'),
    }


def arg_str(name: str, alias: str = None):
    raw = request.args.get(name)
    if raw is None and alias:
        raw = request.args.get(alias)
    if raw is None or not raw.strip():
        return None
    return raw.strip()
