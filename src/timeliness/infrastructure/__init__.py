"""
Infrastructure Layer

Components:
- formats: Format registry, default formats and extractor catalog
- parsing: Matcher, normalizer, builder and the parse boundary
- restrictions: Restriction operands and evaluation
- messages: Error message templates
- validation: Record validator, error collection and pydantic adapter

Usage:
    from timeliness.infrastructure.parsing.parser import parse
    from timeliness.infrastructure.validation import validates_date
"""

__all__: list[str] = []
