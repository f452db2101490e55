import logging

from flask import render_template
from jinja2 import TemplateError

_logger = logging.getLogger(__name__)

TEMPLATE_NAMES = ("view", "edit")


class TemplateRenderError(Exception):
    def __init__(self, name, error: Exception):
        self.name = name
        self.error = error
        super().__init__(str(error))


class TemplateRegistry:
    """
    The page templates, compiled once when the application starts.
    A missing template or a syntax error raises straight out of the constructor,
    which keeps the server from starting with a broken template folder.
    Args:
        jinja_env: The Flask application's Jinja environment.
        names (tuple): Template names, each loaded from "<name>.html".
    """

    def __init__(self, jinja_env, names=TEMPLATE_NAMES):
        self.templates = {}
        for name in names:
            self.templates[name] = jinja_env.get_template(f"{name}.html")
            _logger.debug(f"Loaded template {name}.html")

    def render(self, name: str, page, **context) -> str:
        """
        Render the named template with the page. Must be called inside a request.
        Raises:
            KeyError: If the template was never registered.
            TemplateRenderError: If Jinja fails while rendering.
        """
        template = self.templates[name]
        try:
            return render_template(template, page=page, **context)
        except TemplateError as e:
            raise TemplateRenderError(name, e) from e
