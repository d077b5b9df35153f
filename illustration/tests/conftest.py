from datetime import date

import pytest
from flask.testing import FlaskClient

from illustration.app import create_app

AS_OF = date(2025, 6, 1)


@pytest.fixture()
def client() -> FlaskClient:
    app = create_app({"TESTING": True})
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def as_of() -> date:
    return AS_OF
