class Config:
    # Pages, one "<title><suffix>" file each
    DATA_DIR = "data"
    PAGE_SUFFIX = ".txt"
    PAGE_FILE_MODE = 0o600

    # Folder holding view.html and edit.html, relative to the working directory
    TEMPLATE_DIR = "tmpl"

    FRONT_PAGE = "FrontPage"

    # Escape HTML typed into a page before markup is applied.
    # Turning this off renders stored bodies as trusted HTML.
    ESCAPE_HTML = True

    HOST = "0.0.0.0"
    PORT = 8080
    THREADS = 4

    LOG_DIR = "logs"
    LOG_FILE = "wiki.log"
    LOG_LEVEL = "DEBUG"

    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_DEFAULT = "50000 per day;1000 per hour"

    # The edit form posts a bare "body" field unless this is switched on.
    WTF_CSRF_ENABLED = False
    SECRET_KEY = None

    VERSION = "0.1.0"
