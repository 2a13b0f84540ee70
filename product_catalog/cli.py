"""Flask CLI commands for local storage setup."""
import click
from flask import current_app


def register_cli(app):
    @app.cli.command("create-bucket")
    def create_bucket():
        """Create the configured S3 bucket if it does not exist."""
        from product_catalog.extensions import get_storage
        from product_catalog.services.storage_service import StorageError

        storage = get_storage()
        try:
            created = storage.ensure_bucket()
        except StorageError as e:
            raise click.ClickException(str(e))

        if created:
            click.echo(f"Created bucket {storage.bucket}.")
        else:
            click.echo(f"Bucket {storage.bucket} already exists.")

    @app.cli.command("show-config")
    def show_config():
        """Print the effective object storage settings."""
        cfg = current_app.config
        secret = cfg["S3_SECRET_KEY"]
        masked = f"{secret[:2]}***" if secret else "(unset)"
        click.echo(f"Bucket:     {cfg['S3_BUCKET_NAME']}")
        click.echo(f"Region:     {cfg['S3_REGION']}")
        click.echo(f"Endpoint:   {cfg['S3_ENDPOINT_URL'] or '(aws default)'}")
        click.echo(f"Access key: {cfg['S3_ACCESS_KEY']}")
        click.echo(f"Secret key: {masked}")
        click.echo(f"Sample URL: {_sample_url()}")


def _sample_url():
    from product_catalog.extensions import get_storage
    from product_catalog.services.product_service import image_key

    return get_storage().url_for(image_key("<id>"))
