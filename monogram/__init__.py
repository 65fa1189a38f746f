from flask import Blueprint, Flask, jsonify
from typing import Optional, Type
import logging

from config import Config as DefaultConfig
from .extensions import cors, jwt
from .helpers.raster import FontAsset, Rasterizer
from .helpers.store import FolderAvatarStore

def create_app(
    config_object: Type[DefaultConfig] = DefaultConfig,
    *,
    rasterizer: Optional[Rasterizer] = None,
) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_object)
    _configure_logging(app)

    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "PUT", "DELETE", "OPTIONS"],
        supports_credentials=False,
        vary_header=True,
        max_age=86400,
    )

    jwt.init_app(app)
    _register_jwt_error_handlers(app)

    if rasterizer is None:
        rasterizer = Rasterizer(FontAsset(app.config["FONT_PATH"]))
    store = FolderAvatarStore(app.config["AVATARS_DIR"])

    _register_blueprints(app, store, rasterizer)
    return app

def _configure_logging(app: Flask) -> None:
    level = app.config.get("LOG_LEVEL", "INFO")
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger(__name__).setLevel(level)
    app.logger.setLevel(level)

def _register_blueprints(app: Flask, store: FolderAvatarStore, rasterizer: Rasterizer) -> None:
    api_bp = Blueprint("api", __name__, url_prefix="/api")

    @api_bp.get("/")
    def root():
        return jsonify({"message": "monogram avatar API"}), 200

    from monogram.app.avatars import AvatarsService, create_avatars_router
    service = AvatarsService(
        store,
        rasterizer,
        max_size=app.config["MAX_AVATAR_SIZE"],
        default_size=app.config["DEFAULT_AVATAR_SIZE"],
    )
    api_bp.register_blueprint(create_avatars_router(service), url_prefix="/avatars")

    app.register_blueprint(api_bp)

def _register_jwt_error_handlers(app: Flask):
    from .helpers.utils import json_error

    @jwt.unauthorized_loader
    def _unauthorized(msg):
        return json_error(msg, 401)

    @jwt.invalid_token_loader
    def _invalid(msg):
        return json_error(msg, 422)

    @jwt.expired_token_loader
    def _expired(jwt_header, jwt_payload):
        return json_error("Access token has expired", 401)
