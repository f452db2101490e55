import os
import logging
import tempfile
import threading
from dataclasses import dataclass

from flatwiki.util.helpers import decode_body

_logger = logging.getLogger(__name__)


@dataclass
class Page:
    title: str
    body: bytes = b""

    @property
    def text(self) -> str:
        return decode_body(self.body)


class PageNotFoundError(LookupError):
    def __init__(self, title, reason=None):
        self.title = title
        self.reason = reason
        super().__init__(f"Page {title} not found")


class PageStoreError(Exception):
    def __init__(self, title, error: OSError):
        self.title = title
        self.error = error
        super().__init__(str(error))


class PageStore:
    """
    Flat file storage for wiki pages, one file per title.
    Titles are validated by the router before they reach the store, so they are
    joined onto the data directory as-is.
    Args:
        data_dir (str): Directory holding the page files. Created if missing.
        suffix (str): Extension appended to every title. Default is ".txt".
        file_mode (int): Permission bits for page files. Default is 0o600.
    """

    def __init__(self, data_dir: str = "data", suffix: str = ".txt", file_mode: int = 0o600):
        self.data_dir = data_dir
        self.suffix = suffix
        self.file_mode = file_mode
        self._locks = {}
        self._locks_guard = threading.Lock()

        if not os.path.exists(self.data_dir):
            os.makedirs(self.data_dir)
            _logger.info(f"Created page directory {self.data_dir}")

    def page_path(self, title: str) -> str:
        return os.path.join(self.data_dir, title + self.suffix)

    def exists(self, title: str) -> bool:
        return os.path.isfile(self.page_path(title))

    def load(self, title: str) -> Page:
        """
        Read a page from disk.
        Raises:
            PageNotFoundError: If the file can not be opened or read.
        """
        try:
            with open(self.page_path(title), "rb") as f:
                body = f.read()
        except OSError as e:
            raise PageNotFoundError(title, reason=e) from e
        return Page(title=title, body=body)

    def save(self, page: Page):
        """
        Write a page body to disk, replacing any previous version in one rename.
        Raises:
            PageStoreError: If the temporary file can not be written or moved into place.
        """
        path = self.page_path(page.title)
        with self._lock_for(page.title):
            tmp_path = None
            try:
                fd, tmp_path = tempfile.mkstemp(
                    dir=self.data_dir, prefix=f".{page.title}.", suffix=".tmp"
                )
                with os.fdopen(fd, "wb") as f:
                    f.write(page.body)
                os.chmod(tmp_path, self.file_mode)
                os.replace(tmp_path, path)
            except OSError as e:
                _logger.error(f"Failed to save page {page.title}: {e}")
                if tmp_path and os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise PageStoreError(page.title, e) from e
        _logger.debug(f"Saved page {page.title} to {path}")

    def _lock_for(self, title: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(title)
            if lock is None:
                lock = threading.Lock()
                self._locks[title] = lock
            return lock
