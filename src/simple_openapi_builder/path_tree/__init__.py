"""Path tree exports."""

from .path_tree_builder import PathItem, PathTreeBuilder

__all__ = ["PathItem", "PathTreeBuilder"]
