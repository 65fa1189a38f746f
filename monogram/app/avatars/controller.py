import io

from flask import Blueprint, jsonify, request, send_file
from flask_jwt_extended import get_jwt_identity, jwt_required

from monogram.helpers.store import AvatarNotFound
from monogram.helpers.utils import json_error
from .service import AvatarsService

def _png(data: bytes):
    return send_file(io.BytesIO(data), mimetype="image/png", max_age=3600)

def create_avatars_router(service: AvatarsService) -> Blueprint:
    bp = Blueprint("avatars", __name__)

    @bp.get("/<string:key>/<int:size>")
    def find_avatar(key: str, size: int):
        try:
            data = service.find_avatar(key, size, request.args.get("name"))
        except ValueError as err:
            return json_error(str(err))
        except AvatarNotFound:
            return json_error("Avatar unavailable", 404)
        return _png(data)

    @bp.get("/<string:key>")
    def find_default_avatar(key: str):
        return find_avatar(key, service.default_size)

    @bp.get("/guest/<string:name>/<int:size>")
    def guest_avatar(name: str, size: int):
        try:
            data = service.guest_avatar(name, size)
        except ValueError as err:
            return json_error(str(err))
        except AvatarNotFound:
            return json_error("Avatar unavailable", 404)
        return _png(data)

    @bp.put("/<string:key>")
    @jwt_required()
    def update_avatar(key: str):
        if get_jwt_identity() != key:
            return json_error("Forbidden", 403)
        try:
            service.update_avatar(key, request.get_data())
        except ValueError as err:
            return json_error(str(err))
        return jsonify({"message": "Avatar updated"}), 200

    @bp.delete("/<string:key>")
    @jwt_required()
    def delete_avatar(key: str):
        if get_jwt_identity() != key:
            return json_error("Forbidden", 403)
        try:
            service.delete_avatar(key)
        except AvatarNotFound:
            return json_error("Not found", 404)
        except ValueError as err:
            return json_error(str(err))
        return jsonify({"message": "Avatar deleted"}), 200

    return bp
