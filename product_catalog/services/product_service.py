import logging
import threading
from dataclasses import replace

from product_catalog.models.product import Product

logger = logging.getLogger(__name__)


def image_key(product_id):
    """Storage key of a product's single image."""
    return f"products/{product_id}/image"


class ProductStore:
    """In-memory product registry backed by a lock-guarded dict.

    Records are replaced, never mutated in place, so a product handed out
    to a caller is a stable snapshot. Storage calls always run with the
    lock released.
    """

    def __init__(self, storage):
        self.storage = storage
        self._products = {}
        self._lock = threading.Lock()

    def list_all(self):
        with self._lock:
            return list(self._products.values())

    def get_by_id(self, product_id):
        with self._lock:
            return self._products.get(product_id)

    def create(self, product):
        if not product.id:
            product = replace(product, id=Product.new_id())
        with self._lock:
            self._products[product.id] = product
        logger.info("Created product %s", product.id)
        return product

    def update(self, product_id, product, keep_image=None):
        """Replace a product wholesale.

        With keep_image unset, an image_url of None on the incoming product
        means "keep the current one". Pass keep_image=False to store the
        incoming image_url as is, including None.

        Returns None when product_id is unknown.
        """
        if keep_image is None:
            keep_image = product.image_url is None

        with self._lock:
            existing = self._products.get(product_id)
            if existing is None:
                return None
            product = replace(product, id=product_id)
            if keep_image:
                product = replace(product, image_url=existing.image_url)
            self._products[product_id] = product
        return product

    def delete(self, product_id):
        with self._lock:
            removed = self._products.pop(product_id, None)
        if removed is None:
            return False

        logger.info("Deleted product %s", product_id)
        if removed.image_url is not None:
            self._discard_image(product_id)
        return True

    def _discard_image(self, product_id):
        # The record is already gone; a storage failure must not change that.
        key = image_key(product_id)
        try:
            self.storage.delete(key)
        except Exception:
            logger.exception("Failed to delete stored image %s", key)

    def upload_image(self, product_id, stream, content_type):
        """Store an image for a product and record its URL.

        Returns the updated product, or None when the product does not
        exist (nothing is written to storage in that case).
        """
        if self.get_by_id(product_id) is None:
            return None

        key = image_key(product_id)
        url = self.storage.upload(key, stream, content_type)

        with self._lock:
            current = self._products.get(product_id)
            if current is None:
                logger.warning(
                    "Product %s deleted during image upload; %s left orphaned",
                    product_id,
                    key,
                )
                return None
            product = replace(current, image_url=url)
            self._products[product_id] = product
        logger.info("Stored image for product %s at %s", product_id, key)
        return product

    def download_image(self, product_id):
        """Fetch image bytes. Raises ObjectNotFound if nothing is stored."""
        return self.storage.download(image_key(product_id))

    def __len__(self):
        with self._lock:
            return len(self._products)
