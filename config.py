import os
import tempfile
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
UPLOAD_DIR = os.environ.get(
    "UPLOAD_DIR", os.path.join(tempfile.gettempdir(), "property-report-uploads")
)
SAMPLE_IMAGES_DIR = os.environ.get("SAMPLE_IMAGES_DIR", os.path.join(BASE_DIR, "sample_images"))
DEFAULT_LOGO_PATH = os.environ.get("DEFAULT_LOGO_PATH", os.path.join(BASE_DIR, "logo.png"))
os.makedirs(UPLOAD_DIR, exist_ok=True)

PORT = int(os.environ.get("PORT", 8080))
DEBUG = os.environ.get("RENDER") is None  # debug only when running locally
MAX_CONTENT_LENGTH = int(os.environ.get("MAX_CONTENT_LENGTH", 50 * 1024 * 1024))
CORS_ORIGIN = os.environ.get("CORS_ORIGIN", "*")

PEXELS_API_KEY = os.environ.get("PEXELS_API_KEY", "")
