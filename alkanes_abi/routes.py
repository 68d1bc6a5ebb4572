import os

from flask import Blueprint, current_app, jsonify, request

from .config import CONTRACT_EXTENSIONS
from .errors import AbiError
from .extractor import extract_abi
from .run import make_error

bp = Blueprint("abi", __name__)


def _extract_response(code_bytes, **extra):
    try:
        code_bytes.decode("utf-8")
    except UnicodeDecodeError:
        return jsonify(make_error("read", "Contract source is not valid UTF-8")), 400

    try:
        abi = extract_abi(code_bytes)
    except AbiError as e:
        return jsonify({"success": False, "error": e.to_dict()}), 400
    except Exception as e:
        current_app.logger.error("Error extracting ABI", exc_info=e)
        return jsonify(make_error("internal", str(e))), 500

    return jsonify({"success": True, **extra, "abi": abi.to_dict()})


@bp.route("/api/abi", methods=["POST"])
def extract_uploaded_file():
    """Extract the ABI of an uploaded contract file."""
    if "file" not in request.files:
        return jsonify(make_error("upload", "No file provided")), 400

    file = request.files["file"]
    if not file.filename:
        return jsonify(make_error("upload", "No file selected")), 400

    ext = os.path.splitext(file.filename)[1].lower()
    if ext not in CONTRACT_EXTENSIONS:
        return jsonify(make_error("upload", f"Unsupported file type '{ext}'. Only .rs files are accepted.")), 400

    return _extract_response(file.read(), file=file.filename)


@bp.route("/api/abi/source", methods=["POST"])
def extract_source():
    """Extract the ABI of contract source posted as JSON."""
    data = request.get_json(silent=True)
    if not data or "source" not in data:
        return jsonify(make_error("request", "No source specified")), 400

    source = data["source"]
    if not isinstance(source, str):
        return jsonify(make_error("request", "Source must be a string")), 400

    return _extract_response(source.encode("utf-8"))
