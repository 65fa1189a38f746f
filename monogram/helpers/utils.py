from __future__ import annotations

from typing import Any, Tuple
from flask import jsonify

def json_error(message: str, status: int = 400) -> Tuple[Any, int]:
    return jsonify({"error": message}), status
