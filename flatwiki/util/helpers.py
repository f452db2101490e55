import re

TITLE_PATTERN = re.compile(r"^[A-Za-z0-9]+$")


def validate_title(input_value):
    """
    Validate a page title taken from the URL.
    Args:
        input_value (str): The title to validate.
    Returns:
        str: The validated title, unchanged. Titles are case-sensitive.
    Raises:
        ValueError: If the title is empty or holds anything but ASCII letters and digits.
    """
    if not isinstance(input_value, str):
        raise ValueError("Title must be a string.")
    if not TITLE_PATTERN.fullmatch(input_value):
        raise ValueError("Title can only contain letters and numbers.")
    return input_value


def decode_body(data):
    """
    Turn stored page bytes into text for display and markup.
    Bytes that are not valid UTF-8 are read as Latin-1, so legacy pages still
    show their content instead of failing. The stored bytes are never changed.
    """
    if isinstance(data, str):
        return data
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")
