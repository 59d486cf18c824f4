"""Pages: landing HTML and client route resolution."""

from authdemo.pages.root import render_data_deletion, render_privacy_policy, render_root_page
from authdemo.pages.routing import Page, resolve_page

__all__ = [
    "Page",
    "render_data_deletion",
    "render_privacy_policy",
    "render_root_page",
    "resolve_page",
]
