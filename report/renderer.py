"""
Report renderer: format a day's sorted activity items as plain text, Markdown or JSON.
Text and Markdown use the Jinja2 templates in report/templates.
"""

import json
import os
import re
from typing import List, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from models import ActivityItem

FORMATS = ("text", "md", "json")

_TEMPLATES = {"text": "report.txt.j2", "md": "report.md.j2"}

_env = Environment(
    loader=FileSystemLoader(os.path.join(os.path.dirname(__file__), "templates")),
    autoescape=select_autoescape(["html", "xml"]),
    undefined=StrictUndefined,
    trim_blocks=True,
    keep_trailing_newline=True,
)

_MD_SPECIAL = re.compile(r"([\\`*_\[\]<>#|~])")


def escape_markdown(value) -> str:
    """Backslash-escape characters that Markdown would read as markup."""
    return _MD_SPECIAL.sub(r"\\\1", str(value))


_env.filters["md_escape"] = escape_markdown


def render_text(items: Sequence[ActivityItem], date_str: str = "", header: bool = False) -> str:
    """One "title | source" line per item, a blank line, then the total."""
    return _env.get_template(_TEMPLATES["text"]).render(items=list(items), date=date_str, header=header)


def render_markdown(items: Sequence[ActivityItem], date_str: str = "") -> str:
    return _env.get_template(_TEMPLATES["md"]).render(items=list(items), date=date_str)


def render_json(items: Sequence[ActivityItem], date_str: str = "") -> str:
    activities: List[dict] = [item.as_dict() for item in items]
    payload = {"date": date_str, "total": len(activities), "activities": activities}
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def render(items: Sequence[ActivityItem], fmt: str = "text", date_str: str = "", header: bool = False) -> str:
    """Render items in the requested format ('text', 'md' or 'json')."""
    fmt = (fmt or "text").lower()
    if fmt == "text":
        return render_text(items, date_str, header=header)
    if fmt == "md":
        return render_markdown(items, date_str)
    if fmt == "json":
        return render_json(items, date_str)
    raise ValueError(f"Unsupported format: {fmt!r} (expected one of {', '.join(FORMATS)})")
