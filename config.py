from dotenv import load_dotenv
import os

load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY") or os.urandom(32).hex()

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY") or SECRET_KEY
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"

    AVATARS_DIR = os.getenv("AVATARS_DIR", os.path.join(BASE_DIR, "public", "avatars"))
    # fonts-noto-core on Debian/Ubuntu; the SVG path resolves "Noto Sans" through fontconfig instead
    FONT_PATH = os.getenv("FONT_PATH", "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf")

    DEFAULT_AVATAR_SIZE = int(os.getenv("DEFAULT_AVATAR_SIZE", "64"))
    MAX_AVATAR_SIZE = int(os.getenv("MAX_AVATAR_SIZE", "2048"))

    MAX_CONTENT_LENGTH = 1024 * 1024 * 24
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:4200,http://127.0.0.1:4200").split(",") if o.strip()]

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    PORT = int(os.getenv("PORT", 8888))
    DEBUG = os.getenv("DEBUG", "false").lower() == "true"
