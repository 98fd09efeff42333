"""Folio: content collections for a portfolio site, rendered from Markdown/MDX.

The usual entry points are :class:`ContentRepository` for listing and fetching
documents, :func:`load_config` for ``folio.yml``, and :class:`RenderPipeline`
with :func:`default_registry` for turning a body into HTML.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .components import default_registry
from .config import load_config
from .rendering import RenderPipeline
from .repository import ContentRepository

__all__ = [
    "ContentRepository",
    "RenderPipeline",
    "__version__",
    "default_registry",
    "load_config",
]

try:
    __version__ = version("folio")
except PackageNotFoundError:
    # Running from a source checkout without `pip install -e .`.
    __version__ = "0+unknown"
