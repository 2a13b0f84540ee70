from product_catalog.models.product import Product  # noqa: F401
