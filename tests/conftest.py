import os
import tempfile

import pytest

# tracker.main builds a module-level app on import; keep its database out of the cwd
os.environ.setdefault("FINANCE_TRACKER_DATA_DIR", tempfile.mkdtemp(prefix="tracker-"))

from fastapi.testclient import TestClient  # noqa: E402

from tracker.db import init_db  # noqa: E402
from tracker.main import create_app  # noqa: E402
from tracker.settings import Settings  # noqa: E402


@pytest.fixture
def settings(tmp_path):
    settings = Settings(data_dir=tmp_path, db_path=tmp_path / "t.sqlite")
    init_db(settings)
    return settings


@pytest.fixture
def client(tmp_path):
    app = create_app(Settings(data_dir=tmp_path, db_path=tmp_path / "api.sqlite"))
    return TestClient(app)
