"""Gemini-backed extraction of transactions from bank SMS text.

The model is treated as an opaque collaborator: its output is only trusted to
have the declared shape, never to be correct. Anything that does not parse
into a ``TransactionDraft`` is reported as an ``ExtractionError`` so callers
never see a partial draft.
"""

import json
import re
from datetime import date
from typing import Any, Optional

import google.generativeai as genai
import structlog
from pydantic import ValidationError as PydanticValidationError

from spendsense.config import GeminiSettings, get_gemini_settings
from spendsense.domain.entities import TransactionDraft
from spendsense.domain.errors import ExtractionError

logger = structlog.get_logger(__name__)

_JSON_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*|\s*```\s*$", re.IGNORECASE)

# Keys the model is asked for, mapped to draft field names.
_FIELD_MAP = {
    "amount": "amount",
    "type": "direction",
    "date": "date",
    "merchant": "merchant",
    "bankName": "bank_name",
    "refNo": "ref_no",
    "suggestedPurpose": "suggested_purpose",
}

PROMPT_TEMPLATE = """You are a specialized financial data extractor. Analyze the following banking/SMS notification and extract transaction details.

RULES:
- 'amount' must be a clean number (remove commas and currency symbols).
- 'type' must be 'DEBIT' (for spending/outgoing) or 'CREDIT' (for receiving/incoming).
- 'date' should be in YYYY-MM-DD format. If year is missing, assume the current year ({year}).
- 'merchant' is the person, shop, or entity involved in the transaction.
- 'bankName' is the financial institution (e.g., HDFC, SBI, ICICI, PayPal).
- 'refNo' is the transaction ID, UPI ID, or reference code.
- 'suggestedPurpose' is a short 2-3 word category for the spend (e.g., Food, Salary, Utilities).

Respond with ONLY a JSON object with exactly these keys:
amount, type, date, merchant, bankName, refNo, suggestedPurpose

SMS Text: "{text}"
"""


def build_prompt(text: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return PROMPT_TEMPLATE.format(year=today.year, text=text)


def parse_extraction_payload(payload: Optional[str], raw_text: Optional[str] = None) -> TransactionDraft:
    """Turn the model's JSON reply into a validated draft.

    Args:
        payload: Response text from the model
        raw_text: Original message, kept on the draft for reference

    Returns:
        TransactionDraft with all seven fields populated

    Raises:
        ExtractionError: If the payload is empty, not JSON, or misses fields
    """
    if payload is None or not payload.strip():
        raise ExtractionError("Empty response from extraction service")

    cleaned = _JSON_FENCE_RE.sub("", payload).strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Extraction response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ExtractionError("Extraction response is not a JSON object")

    missing = [key for key in _FIELD_MAP if data.get(key) in (None, "")]
    if missing:
        raise ExtractionError(f"Extraction response is missing fields: {', '.join(missing)}")

    fields: dict[str, Any] = {target: data[source] for source, target in _FIELD_MAP.items()}
    if isinstance(fields["direction"], str):
        fields["direction"] = fields["direction"].strip().upper()
    fields["raw_text"] = raw_text

    try:
        return TransactionDraft(**fields)
    except PydanticValidationError as e:
        raise ExtractionError(f"Extraction response has invalid fields: {e.error_count()} error(s)") from e


class GeminiExtractor:
    """Extract transaction drafts with Google Gemini.

    A ``model`` may be injected (anything with ``generate_content``); otherwise
    one is built from ``GeminiSettings`` on first use.
    """

    def __init__(self, settings: Optional[GeminiSettings] = None, model: Any = None):
        self._settings = settings or get_gemini_settings()
        self._model = model

    def _get_model(self) -> Any:
        if self._model is None:
            if not self._settings.api_key:
                raise ExtractionError("GEMINI_API_KEY is not configured")

            genai.configure(api_key=self._settings.api_key)
            self._model = genai.GenerativeModel(
                model_name=self._settings.model_name,
                generation_config={
                    "temperature": self._settings.temperature,
                    "max_output_tokens": self._settings.max_output_tokens,
                    "response_mime_type": "application/json",
                },
            )
        return self._model

    def extract(self, text: str) -> TransactionDraft:
        """Extract a draft from one message.

        Raises:
            ExtractionError: On any client failure or unusable response
        """
        model = self._get_model()
        logger.debug("gemini_extract_started", text=text)
        try:
            response = model.generate_content(build_prompt(text))
            payload = response.text
        except Exception as e:
            raise ExtractionError(f"Extraction service call failed: {e}") from e

        draft = parse_extraction_payload(payload, raw_text=text)
        logger.debug("gemini_extract_succeeded", amount=str(draft.amount), direction=draft.direction.value)
        return draft
