#!/usr/bin/env python3

import argparse
import os
import secrets

from flask import Flask, jsonify, request
from flask_wtf import CSRFProtect
from waitress import serve
from werkzeug.middleware.proxy_fix import ProxyFix

from flatwiki.config import Config
from flatwiki.limiter import create_limiter
from flatwiki.logger import setup_logger
from flatwiki.website.wiki_request import WikiRequest
from flatwiki.website.wiki_router import plain_error, wiki_route
from flatwiki.wiki.markup import MarkupRenderer
from flatwiki.wiki.page_store import PageStore
from flatwiki.wiki.templates import TemplateRegistry

ROUTE_LIST = [
    wiki_route,
]


class FlatWiki:
    """
    The wiki server. Owns the page store, the markup renderer and the compiled
    templates, and exposes them to request handlers through
    app.extensions["flatwiki"].
    Args:
        config (dict): Settings applied after the defaults and WIKI_* environment variables.
    """

    def __init__(self, config=None):
        self.app = Flask(__name__)
        self.app.request_class = WikiRequest
        self.init_config(config)
        self.app = setup_logger(self.app)

        self.init_attributes()
        self.init_limiter()
        CSRFProtect(self.app)

        for route in ROUTE_LIST:
            self.app.register_blueprint(route)

        self.set_routes()
        self.app.extensions["flatwiki"] = self
        self.app.logger.info("Wiki initialized")

    def init_config(self, config):
        self.app.config.from_object(Config)
        self.app.config.from_prefixed_env("WIKI")
        if config:
            self.app.config.update(config)

        # Flask would resolve a relative folder against the installed module
        self.app.template_folder = os.path.abspath(self.app.config["TEMPLATE_DIR"])
        if not self.app.config.get("SECRET_KEY"):
            self.app.secret_key = secrets.token_hex(32)

    def init_attributes(self):
        self.app.wsgi_app = ProxyFix(self.app.wsgi_app, x_for=1, x_proto=1, x_host=1)

        self.store = PageStore(
            data_dir=self.app.config["DATA_DIR"],
            suffix=self.app.config["PAGE_SUFFIX"],
            file_mode=self.app.config["PAGE_FILE_MODE"],
        )
        self.renderer = MarkupRenderer(escape_html=self.app.config["ESCAPE_HTML"])
        # Raises on a missing or broken template, before the server binds
        self.templates = TemplateRegistry(self.app.jinja_env)

    def init_limiter(self):
        try:
            self.limiter = create_limiter()
            self.limiter.init_app(self.app)
            self.app.logger.info(
                f"Limiter initialized with {self.app.config['RATELIMIT_STORAGE_URI']} storage"
            )
        except Exception as e:
            self.app.logger.error(f"Error initializing limiter: {e}")
            self.app.logger.error("Attempting failover limiter setup")
            self.limiter = create_limiter(storage_uri="memory://")
            self.limiter.init_app(self.app)
            self.app.logger.info("Failover limiter initialized with in-memory storage")

    def set_routes(self):
        @self.app.before_request
        def before_request():
            client_ip = (
                request.headers.get("X-Forwarded-For") or
                request.remote_addr
            )
            self.app.logger.debug(f"Request from {client_ip} - {request.method} : {request.path}")

        @self.app.route("/health", methods=["GET"])
        def health_check():
            return jsonify({"status": "ok", "version": self.app.config["VERSION"]}), 200

        @self.app.errorhandler(404)
        def not_found_error(e):
            return plain_error("404 page not found", 404)

        @self.app.errorhandler(500)
        def internal_error(e):
            self.app.logger.error(f"Internal server error: {e}")
            return plain_error("500 internal server error", 500)


def create_app(config=None):
    return FlatWiki(config).app


def args_parser(argv=None):
    parser = argparse.ArgumentParser(description="Flat file wiki server")
    parser.add_argument("--host", default=None, help="Interface to listen on")
    parser.add_argument("--port", type=int, default=None, help="TCP port, 8080 unless configured")
    parser.add_argument("--threads", type=int, default=None, help="Waitress worker threads")
    return parser.parse_args(argv)


def main(argv=None):
    args = args_parser(argv)
    app = create_app()
    host = args.host or app.config["HOST"]
    port = args.port or app.config["PORT"]
    threads = args.threads or app.config["THREADS"]
    app.logger.info(f"Serving wiki on {host}:{port} with {threads} threads")
    serve(app, host=host, port=port, threads=threads)


if __name__ == "__main__":
    main()
