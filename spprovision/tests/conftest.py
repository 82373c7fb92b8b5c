import os

import pytest

_ENV_KEYS = (
    "sp_site_url",
    "sp_client_id",
    "sp_client_secret",
    "sp_username",
    "sp_password",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    # Keep python-dotenv from picking up a developer's .env
    monkeypatch.chdir(tmp_path)
    yield
    # load_dotenv writes to os.environ directly
    for key in _ENV_KEYS:
        os.environ.pop(key, None)
