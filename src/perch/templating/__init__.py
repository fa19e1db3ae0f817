"""Viewer templates: the UI shell page and its bootstrap script."""

from perch.templating.rendering import DEFAULT_FAVICON, UITemplates

__all__ = ["DEFAULT_FAVICON", "UITemplates"]
