from .html_render import DEFAULT_TITLE, render_html
from .common import (
    format_claim_kind,
    format_currency,
    format_date,
    format_duration,
    format_file_size,
    format_number,
)

__all__ = [
    "DEFAULT_TITLE",
    "render_html",
    "format_claim_kind",
    "format_currency",
    "format_date",
    "format_duration",
    "format_file_size",
    "format_number",
]
