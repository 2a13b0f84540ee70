"""JSON endpoints for products and their images."""
import logging

from flask import Response, abort, current_app, jsonify, request, url_for

from product_catalog.blueprints.api import api_bp
from product_catalog.extensions import get_store
from product_catalog.models.product import Product

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_CONTENT_TYPE = "application/octet-stream"


@api_bp.route("", methods=["GET"])
def list_products():
    products = get_store().list_all()
    return jsonify([p.to_dict() for p in products])


@api_bp.route("/<product_id>", methods=["GET"])
def get_product(product_id):
    product = get_store().get_by_id(product_id)
    if product is None:
        abort(404)
    return jsonify(product.to_dict())


@api_bp.route("", methods=["POST"])
def create_product():
    payload = _read_payload()
    product = get_store().create(_to_product(payload))
    resp = jsonify(product.to_dict())
    resp.status_code = 201
    resp.headers["Location"] = url_for("api.get_product", product_id=product.id)
    return resp


@api_bp.route("/<product_id>", methods=["PUT"])
def update_product(product_id):
    """Full replacement. Omitting imageUrl keeps the current image,
    an explicit null clears it."""
    payload = _read_payload()
    product = get_store().update(
        product_id,
        _to_product(payload),
        keep_image="imageUrl" not in payload,
    )
    if product is None:
        abort(404)
    return jsonify(product.to_dict())


@api_bp.route("/<product_id>", methods=["DELETE"])
def delete_product(product_id):
    if not get_store().delete(product_id):
        abort(404)
    return "", 204


@api_bp.route("/<product_id>/image", methods=["POST"])
def upload_product_image(product_id):
    upload = request.files.get("file")
    if upload is None or not upload.filename:
        abort(400, description="No file uploaded")

    # Multipart parts rarely carry a length, so measure the spooled stream.
    stream = upload.stream
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(0)
    if size == 0:
        abort(400, description="No file uploaded")

    product = get_store().upload_image(
        product_id,
        stream,
        upload.mimetype or DEFAULT_UPLOAD_CONTENT_TYPE,
    )
    if product is None:
        abort(404)
    return jsonify(product.to_dict())


@api_bp.route("/<product_id>/image", methods=["GET"])
def get_product_image(product_id):
    try:
        data = get_store().download_image(product_id)
    except Exception:
        # missing object, missing product and storage outages all read as 404
        logger.info("No image available for product %s", product_id, exc_info=True)
        abort(404)
    return Response(data, mimetype="image/jpeg")


def _read_payload():
    """Decode the JSON body, keeping decimals exact."""
    raw = request.get_data(as_text=True)
    try:
        payload = current_app.json.loads(raw)
    except ValueError:
        abort(400, description="Request body must be JSON")
    if not isinstance(payload, dict):
        abort(400, description="Request body must be a JSON object")
    return payload


def _to_product(payload):
    try:
        return Product.from_dict(payload)
    except ValueError as e:
        abort(400, description=str(e))
