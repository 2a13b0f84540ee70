import logging
from flask import current_app

from product_catalog.services.product_service import ProductStore
from product_catalog.services.storage_service import StorageService

logger = logging.getLogger(__name__)

EXTENSION_KEY = "catalog"


def init_catalog(app, storage=None):
    """Build the storage client and product store for this app.

    A prebuilt storage object can be passed in (tests, scripts); otherwise
    one is created from the S3_* config values.
    """
    if storage is None:
        storage = StorageService.from_config(app.config)
        logger.info(
            "Object storage: bucket=%s endpoint=%s",
            app.config["S3_BUCKET_NAME"],
            app.config["S3_ENDPOINT_URL"] or "aws",
        )
    app.extensions[EXTENSION_KEY] = ProductStore(storage)


def get_store():
    return current_app.extensions[EXTENSION_KEY]


def get_storage():
    return get_store().storage
