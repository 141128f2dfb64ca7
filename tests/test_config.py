"""Tests for app configuration."""
import logging
import sys

from photovault import create_app
from photovault.config import Config, ProductionConfig, TestingConfig
from photovault.extensions import get_services


def test_testing_config(app):
    assert app.config["TESTING"] is True
    assert app.config["OWNER_FORM_FIELD"] == "email"
    assert get_services(app).ingestion.timeout == TestingConfig.INGEST_TIMEOUT_SECONDS


def test_overrides_reach_services(app_factory):
    app = app_factory(INGEST_TIMEOUT_SECONDS=2.5, OWNER_FORM_FIELD="owner")
    services = get_services(app)
    try:
        assert services.ingestion.timeout == 2.5
        assert services.authenticators["form"].field == "owner"
    finally:
        services.shutdown()


def test_store_timeout_bounds_pool_and_statements():
    options = Config.SQLALCHEMY_ENGINE_OPTIONS
    assert options["pool_timeout"] == Config.STORE_TIMEOUT_SECONDS
    assert "statement_timeout" in options["connect_args"]["options"]


def test_production_logs_to_stdout():
    app = create_app(
        "production",
        {"SQLALCHEMY_DATABASE_URI": "sqlite://", "SQLALCHEMY_ENGINE_OPTIONS": {}},
    )
    added = [
        h for h in app.logger.handlers
        if isinstance(h, logging.StreamHandler) and h.stream is sys.stdout
    ]
    try:
        assert not hasattr(ProductionConfig, "SECRET_KEY")
        assert added
        assert app.logger.level == logging.INFO
    finally:
        for handler in added:
            app.logger.removeHandler(handler)
        get_services(app).shutdown()
