"""Image upload, listing, archive and recovery endpoints."""
import logging
from flask import g, jsonify, request
from photovault.auth import BEARER, FORM, require_owner
from photovault.blueprints.api import api_bp
from photovault.errors import PhotoVaultError
from photovault.extensions import get_services
from photovault.services.ingestion import Upload
from photovault.services.media import serialize_image

logger = logging.getLogger(__name__)


@api_bp.app_errorhandler(PhotoVaultError)
def handle_photovault_error(exc):
    if exc.status_code >= 500:
        logger.warning("%s on %s %s: %s", exc.error, request.method, request.path, exc.message)
    return jsonify(exc.to_dict()), exc.status_code


@api_bp.route("/upload", methods=["POST"])
@require_owner(FORM)
def upload():
    """Store every file sent under ``images`` for the owner in the form."""
    # An empty file input still sends a part, with no filename
    files = [
        Upload(name=f.filename, data=f.read())
        for f in request.files.getlist("images")
        if f.filename
    ]
    images = get_services().ingestion.ingest(g.owner, files)
    return jsonify(
        {"success": True, "images": [serialize_image(image) for image in images]}
    )


@api_bp.route("/images")
@require_owner(BEARER)
def list_images():
    images = get_services().store.list_images(g.owner)
    return jsonify([serialize_image(image) for image in images])


@api_bp.route("/show_one/<int:image_id>")
@require_owner(BEARER)
def show_one(image_id):
    image = get_services().store.get_image(image_id, g.owner)
    return jsonify(serialize_image(image))


@api_bp.route("/deletephoto/<int:image_id>", methods=["DELETE"])
@require_owner(BEARER)
def delete_photo(image_id):
    get_services().archive.delete(image_id, g.owner)
    return jsonify({"message": "Photo deleted and archived successfully."})


@api_bp.route("/recoverphoto/<int:image_id>", methods=["DELETE", "POST"])
@require_owner(BEARER)
def recover_photo(image_id):
    get_services().archive.recover(image_id, g.owner)
    return jsonify({"message": "Photo recovered successfully."})
