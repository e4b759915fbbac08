"""External service clients for spendsense."""

from spendsense.services.gemini import GeminiExtractor, parse_extraction_payload

__all__ = ["GeminiExtractor", "parse_extraction_payload"]
