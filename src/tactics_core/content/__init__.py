"""Content definitions: id-keyed registries and the YAML loader.

Submodules:
    repository: ContentRepository and its per-kind registries.
    loader: ContentLoader for abilities.yaml, equipment.yaml, classes.yaml.
"""

from __future__ import annotations

from tactics_core.content.loader import DEFAULT_CONTENT_PATH, ContentLoader, load_default_content
from tactics_core.content.repository import ContentRepository, Registry


__all__ = [
    "ContentRepository",
    "Registry",
    "ContentLoader",
    "DEFAULT_CONTENT_PATH",
    "load_default_content",
]
