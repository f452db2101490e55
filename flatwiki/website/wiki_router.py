from functools import wraps

from flask import (
    Blueprint,
    abort,
    current_app,
    redirect,
    request,
    url_for,
)
from markupsafe import Markup

from flatwiki.util.helpers import validate_title
from flatwiki.website.forms.edit_page import EditPageForm
from flatwiki.wiki.page_store import Page, PageNotFoundError, PageStoreError
from flatwiki.wiki.templates import TemplateRenderError

wiki_route = Blueprint("wiki", __name__)

ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def get_wiki():
    return current_app.extensions["flatwiki"]


def plain_error(message, status):
    return message, status, {"Content-Type": "text/plain; charset=utf-8"}


def title_handler(fn):
    """
    Reject any title that is not purely ASCII letters and digits with a 404
    before the wrapped handler runs, whatever the request method.
    """

    @wraps(fn)
    def wrapper(title):
        try:
            validate_title(title)
        except ValueError as e:
            current_app.logger.debug(f"Rejected title {title!r} on {request.path}: {e}")
            abort(404)
        return fn(title)

    return wrapper


def render_page(name, page, **context):
    wiki = get_wiki()
    try:
        return wiki.templates.render(name, page, **context)
    except TemplateRenderError as e:
        current_app.logger.error(f"Template {name} failed for page {page.title}: {e}")
        return plain_error(str(e), 500)


# Any path without a handler of its own lands on the front page
@wiki_route.route("/", methods=ANY_METHOD)
@wiki_route.route("/<path:anything>", methods=ANY_METHOD)
def front_page(anything=None):
    return redirect(url_for("wiki.view", title=current_app.config["FRONT_PAGE"]))


@wiki_route.route("/view/", defaults={"title": ""}, methods=ANY_METHOD)
@wiki_route.route("/view/<path:title>", methods=ANY_METHOD)
@title_handler
def view(title):
    wiki = get_wiki()
    try:
        page = wiki.store.load(title)
    except PageNotFoundError:
        current_app.logger.debug(f"Page {title} does not exist, redirecting to edit")
        return redirect(url_for("wiki.edit", title=title))

    html = wiki.renderer.render(page.body)
    return render_page("view", Page(title=page.title, body=Markup(html)))


@wiki_route.route("/edit/", defaults={"title": ""}, methods=ANY_METHOD)
@wiki_route.route("/edit/<path:title>", methods=ANY_METHOD)
@title_handler
def edit(title):
    wiki = get_wiki()
    try:
        page = wiki.store.load(title)
    except PageNotFoundError:
        page = Page(title=title)

    form = EditPageForm(formdata=None, body=page.text)
    return render_page("edit", Page(title=page.title, body=page.text), form=form)


@wiki_route.route("/save/", defaults={"title": ""}, methods=ANY_METHOD)
@wiki_route.route("/save/<path:title>", methods=ANY_METHOD)
@title_handler
def save(title):
    if request.method != "POST":
        abort(405, valid_methods=["POST"])

    wiki = get_wiki()
    page = Page(title=title, body=request.form_bytes("body"))
    try:
        wiki.store.save(page)
    except PageStoreError as e:
        return plain_error(str(e), 500)

    current_app.logger.info(f"Saved page {title} ({len(page.body)} bytes)")
    return redirect(url_for("wiki.view", title=title))
