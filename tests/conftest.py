import os

# Must be set before shared.core.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["OVERSELL_POLICY"] = "clamp"
os.environ["MISSING_ITEM_POLICY"] = "reject"
os.environ["ITEM_DELETE_POLICY"] = "forbid"
os.environ["SMTP_HOST"] = ""

from pathlib import Path  # noqa: E402

import pytest  # noqa: E402

from shared.core.database import Base, SessionLocal, engine, init_db  # noqa: E402
from shared.helpers.notification_helper import (  # noqa: E402
    EMAIL_CHANNEL, SLACK_CHANNEL, TEAMS_CHANNEL, LowStockNotifier)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))
        if "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)


def pytest_configure(config):
    config.addinivalue_line("markers", "application: ledger and helper tests")
    config.addinivalue_line("markers", "integration: HTTP tests via TestClient")


@pytest.fixture(autouse=True)
def reset_db():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db(reset_db):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


class RecordingSender:
    """Channel sender that records every attempt for test assertions."""

    def __init__(self, should_succeed=True, error=None):
        self.calls = []
        self.should_succeed = should_succeed
        self.error = error

    def send(self, event, destination):
        self.calls.append((event, destination))
        if self.error is not None:
            raise self.error
        return self.should_succeed


@pytest.fixture()
def senders():
    return {
        EMAIL_CHANNEL: RecordingSender(),
        TEAMS_CHANNEL: RecordingSender(),
        SLACK_CHANNEL: RecordingSender(),
    }


@pytest.fixture()
def notifier(senders):
    return LowStockNotifier(senders)


@pytest.fixture()
def recording_sender():
    return RecordingSender
