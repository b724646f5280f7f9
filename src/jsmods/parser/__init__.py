"""
This facade exposes the public API for the parser module.
"""
from .javascript_parser import parse, validate_syntax
from .css_parser import parse_stylesheet

__all__ = ["parse", "validate_syntax", "parse_stylesheet"]
