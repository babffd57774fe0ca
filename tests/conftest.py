import pytest

from app import BarbershopApp

TEST_CONFIG = {
    "DATABASE_URL": "sqlite://",
    "TESTING": True,
    "SECRET_KEY": "test-secret",
    "GEMINI_API_KEY": "",
    "API_KEY": "",
}


class FakeGenerator:
    """Stands in for TextGenerator; records calls."""

    def __init__(self, confirmation="Até logo!", summary="Bom dia!", error=None):
        self.confirmation = confirmation
        self.summary = summary
        self.error = error
        self.calls = []

    def confirm_for(self, booking, shop_name):
        self.calls.append(("confirm_for", booking.id, shop_name))
        if self.error:
            raise self.error
        return self.confirmation

    def summarize(self, bookings, shop_name):
        self.calls.append(("summarize", [b.id for b in bookings], shop_name))
        return self.summary


@pytest.fixture
def barbershop():
    return BarbershopApp(dict(TEST_CONFIG))


@pytest.fixture
def app(barbershop):
    return barbershop.app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(barbershop):
    with barbershop.app.app_context():
        yield barbershop.store


@pytest.fixture
def barber_client(client):
    client.post("/barber/login")
    return client
