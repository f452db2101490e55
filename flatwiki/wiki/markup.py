import re
from dataclasses import dataclass

from markupsafe import escape

from flatwiki.util.helpers import decode_body


@dataclass(frozen=True)
class MarkupRule:
    name: str
    pattern: re.Pattern
    replacement: str


# End of line, tolerating the \r left behind by browser textareas.
EOL = r"(?=\r?$)"


def heading_rule(level: int, tag_level: int = None) -> MarkupRule:
    hashes = "#" * level
    tag = f"h{tag_level or level}"
    return MarkupRule(
        name=f"h{level}",
        pattern=re.compile(rf"^{hashes} (.+) {hashes}{EOL}", re.MULTILINE),
        replacement=rf"<{tag}>\1</{tag}>",
    )


DEFAULT_RULES = (
    heading_rule(1),
    heading_rule(2),
    heading_rule(3),
    heading_rule(4),
    heading_rule(5),
    # Level six has always rendered as <h5>; pages in the wild depend on it.
    heading_rule(6, tag_level=5),
    MarkupRule(
        name="italic",
        pattern=re.compile(r" \*(?!\*)(.+)(?<!\*)\*(?!\*)"),
        replacement=r"<i>\1</i>",
    ),
    MarkupRule(
        name="bold",
        pattern=re.compile(r"\*\*(.+)\*\*"),
        replacement=r"<b>\1</b>",
    ),
    MarkupRule(
        name="strikethrough",
        pattern=re.compile(r"~(.+)~"),
        replacement=r"<s>\1</s>",
    ),
    MarkupRule(
        name="hr",
        pattern=re.compile(rf"^[*\-_]{{3,}}{EOL}", re.MULTILINE),
        replacement="<hr>",
    ),
)


class MarkupRenderer:
    """
    Turns a page body written in the wiki's inline markup into an HTML fragment.
    Args:
        rules (tuple): Ordered MarkupRule values, each applied once over the whole body.
        escape_html (bool): Escape HTML in the body before any rule runs, so only
            the tags emitted by the rules reach the browser. Default is True.
    """

    def __init__(self, rules=DEFAULT_RULES, escape_html: bool = True):
        self.rules = tuple(rules)
        self.escape_html = escape_html

    def render(self, text) -> str:
        """
        Render a body, given as text or as the raw bytes of a page file.
        """
        text = decode_body(text)
        if self.escape_html:
            text = str(escape(text))
        for rule in self.rules:
            text = rule.pattern.sub(rule.replacement, text)
        return text

    def apply_rule(self, name: str, text: str) -> str:
        """
        Apply a single named rule, without escaping. Raises KeyError for unknown names.
        """
        for rule in self.rules:
            if rule.name == name:
                return rule.pattern.sub(rule.replacement, text)
        raise KeyError(name)


def render_markup(text: str, escape_html: bool = True) -> str:
    return MarkupRenderer(escape_html=escape_html).render(text)
