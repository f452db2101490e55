from pathlib import Path

import pytest

from wiki_app import create_app

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "tmpl"


@pytest.fixture
def wiki_config(tmp_path):
    return {
        "TESTING": True,
        "DATA_DIR": str(tmp_path / "data"),
        "TEMPLATE_DIR": str(TEMPLATE_DIR),
        "LOG_DIR": str(tmp_path / "logs"),
        "LOG_LEVEL": "WARNING",
        "RATELIMIT_ENABLED": False,
    }


@pytest.fixture
def app(wiki_config):
    return create_app(wiki_config)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def data_dir(wiki_config):
    return wiki_config["DATA_DIR"]
