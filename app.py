"""Flask application for the property investment report generator."""

import io
import os
import re
import uuid
import logging
from flask import Flask, Response, request, jsonify, send_file
from flask_cors import CORS

from config import (
    UPLOAD_DIR, DEFAULT_LOGO_PATH, PORT, DEBUG, MAX_CONTENT_LENGTH, CORS_ORIGIN,
)
from services.pdf_generator import generate_pdf
from services.uploads import materialize_images, remove_files, write_base64_image
from services.api_clients.pexels_client import PexelsClient, ProxyError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = MAX_CONTENT_LENGTH
CORS(app, origins=CORS_ORIGIN)

_UNSAFE_FILENAME = re.compile(r"[^a-z0-9 \-_]", re.IGNORECASE)


def _download_name(data: dict) -> str:
    """Attachment name from the address, keeping only letters, digits, spaces, - and _."""
    address = data.get("address") or "Property Report"
    return f"{_UNSAFE_FILENAME.sub('', str(address)) or 'Property Report'}.pdf"


@app.route("/health")
def health():
    return jsonify({"ok": True})


@app.route("/generate", methods=["POST"])
def generate():
    body = request.get_json(silent=True) or {}
    data = body.get("data") if isinstance(body.get("data"), dict) else {}
    logger.info(
        f"Generate request: selected_calculators={data.get('selected_calculators')!r}, "
        f"calculator_type={data.get('calculator_type')!r}"
    )

    temp_files: list[str] = []
    out_path = os.path.join(UPLOAD_DIR, f"report-{uuid.uuid4().hex}.pdf")
    try:
        try:
            images = materialize_images(body.get("images"), temp_files)
            logo_path = None
            if body.get("logo_base64"):
                logo_path = write_base64_image(body["logo_base64"], "logo")
                temp_files.append(logo_path)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        if logo_path is None:
            if os.path.exists(DEFAULT_LOGO_PATH):
                logo_path = DEFAULT_LOGO_PATH
            else:
                logger.warning(f"No logo uploaded and default logo not found at {DEFAULT_LOGO_PATH}")

        generate_pdf(data, images, out_path, logo_path)
        with open(out_path, "rb") as f:
            content = f.read()
        return send_file(
            io.BytesIO(content), mimetype="application/pdf",
            as_attachment=True, download_name=_download_name(data),
        )
    except Exception as e:
        logger.exception("PDF generation failed")
        return jsonify({"error": str(e) or "Failed to generate PDF"}), 500
    finally:
        remove_files(temp_files + [out_path])


@app.route("/search-city-images")
def search_city_images():
    city = request.args.get("city") or "liverpool"
    try:
        return jsonify({"images": PexelsClient().search_city_images(city)})
    except Exception:
        logger.exception("Error searching city images")
        return jsonify({"error": "Failed to search images"}), 500


@app.route("/proxy-image")
def proxy_image():
    url = request.args.get("url")
    if not url:
        return jsonify({"error": "Missing url parameter"}), 400

    logger.info(f"Proxy request for URL: {url}")
    try:
        content, content_type = PexelsClient().fetch_image(url)
    except ProxyError as e:
        return jsonify({"error": str(e)}), e.status
    except Exception as e:
        logger.exception("Proxy error")
        return jsonify({"error": str(e) or "Proxy error"}), 500

    response = Response(content, mimetype=content_type)
    response.headers["Content-Type"] = content_type
    response.headers["Cache-Control"] = "public, max-age=86400"
    return response


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=PORT, debug=DEBUG, use_reloader=False)
