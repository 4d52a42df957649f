import os

os.environ["STORAGE_BACKEND"] = "memory"
os.environ["API_TOKEN"] = ""

import pytest
from fastapi.testclient import TestClient

from calllogger.core.deps import get_store
from calllogger.main import app
from calllogger.services.codec import HEADER
from calllogger.services.row_store import MemoryRowStore


def make_row(call_id, phone="", name="", city="", time="", call_type="", priority=""):
    return [call_id, phone, name, city, "", time, call_type, "", "", "", priority, "", ""]


@pytest.fixture()
def store():
    return MemoryRowStore(
        [
            list(HEADER),
            make_row("1", phone="555-0100", name="Jane Doe", city="Boston",
                     time="2024-03-01T09:00:00.000Z", call_type="Sales", priority="Standard"),
            make_row("2", phone="555-0101", name="John Smith", city="Denver",
                     time="2024-02-01T09:00:00.000Z", call_type="Support", priority="Urgent"),
            make_row("3", phone="555-0102", name="Ana Lima", city="Austin",
                     time="2024-04-01T09:00:00.000Z", call_type="Sales", priority="Urgent"),
        ]
    )


@pytest.fixture()
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
