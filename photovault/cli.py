"""Flask CLI commands for admin operations."""
import click

from photovault.extensions import db, get_services


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create the images and deleted_images tables."""
        from photovault.models import Image, ArchivedImage  # noqa: F401

        db.create_all()
        click.echo("Database initialized.")

    @app.cli.command("stats")
    @click.option("--owner", default=None, help="Only count this owner's images.")
    def stats(owner):
        """Show live and archived image counts."""
        live, archived = get_services().store.count_images(owner)
        scope = owner or "all owners"
        click.echo(f"Images for {scope}:")
        click.echo(f"  live: {live}")
        click.echo(f"  archived: {archived}")

    @app.cli.command("find-duplicates")
    def find_duplicates():
        """List images left in both tables by an interrupted delete or recover."""
        duplicates = get_services().store.find_duplicates()
        if not duplicates:
            click.echo("No duplicated images.")
            return
        click.echo(f"{len(duplicates)} duplicated image(s):")
        for image_id, owner in duplicates:
            click.echo(f"  {image_id}  {owner}")
