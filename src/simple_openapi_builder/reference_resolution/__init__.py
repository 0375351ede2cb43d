"""Reference resolution exports."""

from .content_resolver import DEFAULT_CONTENT_TYPE, ReferenceResolver

__all__ = ["DEFAULT_CONTENT_TYPE", "ReferenceResolver"]
