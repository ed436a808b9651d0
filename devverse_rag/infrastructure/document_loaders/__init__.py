"""Article loader implementations."""
from .mdx_loader import MdxArticleLoader, extract_body, parse_metadata

__all__ = ["MdxArticleLoader", "extract_body", "parse_metadata"]
