import logging
from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

logger = logging.getLogger(__name__)

db = SQLAlchemy()
migrate = Migrate()

EXTENSION_KEY = "photovault"


class Services:
    """Components wired for one app, each built on the same store."""

    def __init__(self, store, ingestion, archive, authenticators):
        self.store = store
        self.ingestion = ingestion
        self.archive = archive
        self.authenticators = authenticators

    def shutdown(self):
        self.ingestion.shutdown()


def init_services(app, authenticators=None):
    from photovault.auth import (
        BEARER,
        FORM,
        BearerTokenAuthenticator,
        FormFieldAuthenticator,
    )
    from photovault.services.archive import ArchiveService
    from photovault.services.image_store import ImageStore
    from photovault.services.ingestion import IngestionCoordinator

    store = ImageStore(db)
    resolved = {
        FORM: FormFieldAuthenticator(app.config["OWNER_FORM_FIELD"]),
        BEARER: BearerTokenAuthenticator(),
    }
    resolved.update(authenticators or {})

    services = Services(
        store=store,
        ingestion=IngestionCoordinator(
            store,
            max_workers=app.config["INGEST_MAX_WORKERS"],
            timeout=app.config["INGEST_TIMEOUT_SECONDS"],
        ),
        archive=ArchiveService(store),
        authenticators=resolved,
    )
    app.extensions[EXTENSION_KEY] = services
    logger.debug(
        "Services ready (ingest workers=%s)", app.config["INGEST_MAX_WORKERS"]
    )
    return services


def get_services(app=None):
    app = app or current_app
    return app.extensions[EXTENSION_KEY]
