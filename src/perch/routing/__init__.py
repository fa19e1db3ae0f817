"""Mount-prefix routing for document bundles."""

from perch.routing.route import MountMatch, Route
from perch.routing.router import Router

__all__ = ["MountMatch", "Route", "Router"]
