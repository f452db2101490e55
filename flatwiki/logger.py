#!/usr/bin/env python3

import logging, os
from logging.handlers import TimedRotatingFileHandler

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(module)s - %(message)s"


def replace_handlers(logger, handlers, level):
    # Close what an earlier app attached so its log file is released
    for old_handler in logger.handlers[:]:
        logger.removeHandler(old_handler)
        old_handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def setup_logger(app):
    logs_dir = app.config["LOG_DIR"]
    log_name = app.config["LOG_FILE"]
    log_level = logging.getLevelName(str(app.config["LOG_LEVEL"]).upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {app.config['LOG_LEVEL']}")

    if not os.path.exists(logs_dir):
        os.makedirs(logs_dir)

    log_path = os.path.join(logs_dir, log_name)

    formatter = logging.Formatter(LOG_FORMAT)
    file_handler = TimedRotatingFileHandler(
        log_path, when="midnight", interval=1, backupCount=7, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(log_level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    handlers = [file_handler, console_handler]
    replace_handlers(app.logger, handlers, log_level)
    # Store and template modules log under the package name
    replace_handlers(logging.getLogger("flatwiki"), handlers, log_level)
    replace_handlers(logging.getLogger("waitress"), handlers, log_level)

    app.logger.info(f"Wiki logger initialized, writing to {log_path}")
    return app
