"""
Markup helpers for report log details.
"""

from dataclasses import dataclass


def escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return (text.replace("&", "&amp;")
               .replace("<", "&lt;")
               .replace(">", "&gt;")
               .replace('"', "&quot;")
               .replace("'", "&#x27;"))


@dataclass(frozen=True)
class Markup:
    """Preformatted code block wrapping raw text."""
    text: str

    def get_markup(self) -> str:
        return f'<textarea readonly class="code-block">{escape_html(self.text)}</textarea>'

    def __str__(self) -> str:
        return self.get_markup()


def code_block(text: str) -> Markup:
    """Wrap text in a code block."""
    return Markup(text)
