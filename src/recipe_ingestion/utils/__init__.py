from .coercion import is_blank, parse_leading_int, parse_leading_number, format_number

__all__ = ["is_blank", "parse_leading_int", "parse_leading_number", "format_number"]
