import logging
import os
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import pytest
from jinja2 import TemplateNotFound

from flatwiki.config import Config
from wiki_app import args_parser, create_app

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "tmpl"


def test_defaults(app):
    assert app.config["PORT"] == 8080
    assert app.config["PAGE_SUFFIX"] == ".txt"
    assert app.config["PAGE_FILE_MODE"] == 0o600
    assert app.config["FRONT_PAGE"] == "FrontPage"
    assert Config.TEMPLATE_DIR == "tmpl"


def test_environment_overrides(monkeypatch, wiki_config):
    monkeypatch.setenv("WIKI_FRONT_PAGE", "Start")
    monkeypatch.setenv("WIKI_PORT", "9090")
    app = create_app(wiki_config)
    assert app.config["FRONT_PAGE"] == "Start"
    assert app.config["PORT"] == 9090


def test_explicit_config_wins_over_environment(monkeypatch, wiki_config):
    monkeypatch.setenv("WIKI_FRONT_PAGE", "Start")
    wiki_config["FRONT_PAGE"] = "Explicit"
    assert create_app(wiki_config).config["FRONT_PAGE"] == "Explicit"


def test_log_file_created(app, wiki_config):
    assert os.path.isfile(os.path.join(wiki_config["LOG_DIR"], "wiki.log"))
    assert app.logger.level == logging.WARNING


def test_unknown_log_level(wiki_config):
    wiki_config["LOG_LEVEL"] = "LOUD"
    with pytest.raises(ValueError):
        create_app(wiki_config)


def test_page_directory_created(app, data_dir):
    assert os.path.isdir(data_dir)


def test_args_parser():
    args = args_parser(["--port", "9000", "--threads", "8"])
    assert args.port == 9000
    assert args.threads == 8
    assert args.host is None


def test_rate_limit(wiki_config):
    wiki_config["RATELIMIT_ENABLED"] = True
    wiki_config["RATELIMIT_DEFAULT"] = "2 per minute"
    client = create_app(wiki_config).test_client()
    assert client.get("/health").status_code == 200
    assert client.get("/health").status_code == 200
    assert client.get("/health").status_code == 429


def test_template_dir_resolved_from_working_directory(monkeypatch, wiki_config, tmp_path):
    monkeypatch.chdir(TEMPLATE_DIR.parent)
    wiki_config["TEMPLATE_DIR"] = "tmpl"
    app = create_app(wiki_config)
    assert app.template_folder == str(TEMPLATE_DIR)

    monkeypatch.chdir(tmp_path)
    with pytest.raises(TemplateNotFound):
        create_app(wiki_config)


def test_rebuilding_app_closes_old_log_handlers(wiki_config):
    first = create_app(wiki_config)
    old_handlers = list(first.logger.handlers)
    create_app(wiki_config)

    file_handlers = [h for h in old_handlers if isinstance(h, TimedRotatingFileHandler)]
    assert file_handlers
    for handler in file_handlers:
        assert handler.stream is None
    assert not set(old_handlers) & set(logging.getLogger("flatwiki").handlers)
