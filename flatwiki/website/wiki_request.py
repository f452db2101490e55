from urllib.parse import parse_qsl

from flask import Request

FORM_URLENCODED = "application/x-www-form-urlencoded"


class WikiRequest(Request):
    """
    Request that keeps the raw body of url-encoded forms, so page bodies can be
    stored as the exact bytes the client sent.
    """

    def _load_form_data(self):
        if self.mimetype == FORM_URLENCODED:
            self.get_data(cache=True, parse_form_data=False)
        super()._load_form_data()

    def form_bytes(self, name, default=b""):
        """
        Return a form field as bytes, undoing only the percent and plus
        encoding. Multipart fields fall back to the parsed form, encoded as UTF-8.
        """
        if self.mimetype == FORM_URLENCODED:
            data = self.get_data(cache=True).decode("latin-1")
            # Latin-1 maps every byte to one code point and back
            for key, value in parse_qsl(data, keep_blank_values=True, encoding="latin-1"):
                if key == name:
                    return value.encode("latin-1")
            return default

        value = self.form.get(name)
        if value is None:
            return default
        return value.encode("utf-8")
