import os


class Config:
    """Base configuration. All values from env vars."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-me")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # S3 (any S3-compatible endpoint works, e.g. LocalStack or MinIO)
    S3_ENDPOINT_URL = os.environ.get("S3_ENDPOINT_URL", "")
    S3_ACCESS_KEY = os.environ.get("S3_ACCESS_KEY", "test")
    S3_SECRET_KEY = os.environ.get("S3_SECRET_KEY", "test")
    S3_BUCKET_NAME = os.environ.get("S3_BUCKET_NAME", "product-catalog-images")
    S3_REGION = os.environ.get("S3_REGION", "us-east-1")

    # Uploads
    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_UPLOAD_MB", "10")) * 1024 * 1024

    # App
    APP_URL = os.environ.get("APP_URL", "http://localhost:5000")


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")
    S3_ENDPOINT_URL = os.environ.get("S3_ENDPOINT_URL", "http://localhost:4566")


class ProductionConfig(Config):
    DEBUG = False
    PREFERRED_URL_SCHEME = "https"

    @classmethod
    def init_app(cls, app):
        import logging
        import sys

        assert app.config["SECRET_KEY"] != "dev-secret-change-me", (
            "SECRET_KEY must be set in production"
        )
        if not app.config["S3_ENDPOINT_URL"]:
            assert app.config["S3_ACCESS_KEY"] != "test", (
                "S3_ACCESS_KEY must be set when talking to AWS"
            )

        # Stream logs to stdout for container platforms
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.INFO)
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"
        )
        handler.setFormatter(formatter)
        app.logger.addHandler(handler)
        app.logger.info("Product catalog starting in production mode")


class TestingConfig(Config):
    TESTING = True
    S3_ENDPOINT_URL = "http://localhost:4566"
    S3_BUCKET_NAME = "test-bucket"
    S3_ACCESS_KEY = "test"
    S3_SECRET_KEY = "test"
    S3_REGION = "us-east-1"


config_map = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
