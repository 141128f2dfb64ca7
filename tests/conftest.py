import pytest
from photovault import create_app
from photovault.extensions import db as _db, get_services


def make_app(tmp_path, **overrides):
    # File-backed so ingestion worker threads get their own connections
    test_config = {"SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'photovault.db'}"}
    authenticators = overrides.pop("authenticators", None)
    test_config.update(overrides)
    return create_app("testing", test_config, authenticators=authenticators)


@pytest.fixture
def app_factory(tmp_path):
    """Build an extra app on its own database, with config or authenticator overrides."""

    def factory(**overrides):
        return make_app(tmp_path / "extra", **overrides)

    (tmp_path / "extra").mkdir()
    return factory


@pytest.fixture
def app(tmp_path):
    """Create application for testing, one database per test."""
    app = make_app(tmp_path)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()
    get_services(app).shutdown()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def services(app):
    return get_services(app)


@pytest.fixture
def store(services):
    return services.store


@pytest.fixture
def archive(services):
    return services.archive


@pytest.fixture
def ingestion(services):
    return services.ingestion
