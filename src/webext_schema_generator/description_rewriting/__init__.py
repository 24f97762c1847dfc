"""Description rewriting exports."""

from .markup_rewriter import (
    REWRITTEN_FIELDS,
    rebrand,
    replace_relative_hrefs,
    replace_url_placeholders,
    rewrite_markup,
)

__all__ = [
    "REWRITTEN_FIELDS",
    "rebrand",
    "replace_relative_hrefs",
    "replace_url_placeholders",
    "rewrite_markup",
]
