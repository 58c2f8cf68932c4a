"""
Narrative Generation
Gemini-backed design recommendation and cost-benefit text, plus the
best-effort parser that splits the reply into its two sections
"""

import re
import logging
from typing import Optional

import google.generativeai as genai

from .errors import ExternalServiceDegraded
from .schemas import NarrativeSections, NarrativeParseFailure, NarrativeParseResult

logger = logging.getLogger(__name__)

FALLBACK_RECOMMENDATION = "Unable to generate recommendation at this time."
FALLBACK_COST_BENEFIT = "Unable to perform cost-benefit analysis due to an error."
MISSING_RECOMMENDATION = "No recommendation provided."
MISSING_COST_BENEFIT = "No cost-benefit analysis provided."

SYSTEM_INSTRUCTION = (
    "You are a helpful architectural advisor focused on climate resilience. "
    "Respond clearly and concisely."
)

# "2. Cost-Benefit Analysis" heading; a numbered list inside a section is not a split point
_COST_BENEFIT_SPLIT = re.compile(
    r"^[ \t]*[*#]*[ \t]*2\.(?=[ \t]*[*#]*[ \t]*cost[- ]benefit analysis)",
    re.MULTILINE | re.IGNORECASE
)
# "2." at the start of a line, not "2.5 ft"
_SECTION_SPLIT = re.compile(r"^[ \t]*[*#]*[ \t]*2\.(?!\d)", re.MULTILINE)
_FIRST_MARKER = re.compile(r"^\s*[*#]*\s*1\.(?!\d)\s*")
_HEADING = re.compile(
    r"^\s*[*#]*\s*(design recommendation|cost[- ]benefit analysis)\s*:?\s*[*#]*\s*",
    re.IGNORECASE
)


def _clean_section(section: str) -> Optional[str]:
    text = _FIRST_MARKER.sub("", section, count=1)
    text = _HEADING.sub("", text, count=1).strip()
    return text or None


def parse_narrative(text: Optional[str]) -> NarrativeParseResult:
    """
    Split generator output into recommendation and cost-benefit sections.

    The reply is expected to follow the "1. Design Recommendation" /
    "2. Cost-Benefit Analysis" layout requested in the prompt. Anything
    short of two non-empty sections is reported as a parse failure that
    keeps whichever section was found.
    """
    if not text or not text.strip():
        return NarrativeParseFailure(reason="empty response")

    parts = _COST_BENEFIT_SPLIT.split(text, maxsplit=1)
    if len(parts) == 1:
        parts = _SECTION_SPLIT.split(text, maxsplit=1)
    recommendation = _clean_section(parts[0])
    cost_benefit = _clean_section(parts[1]) if len(parts) > 1 else None

    if recommendation and cost_benefit:
        return NarrativeSections(recommendation=recommendation, cost_benefit_analysis=cost_benefit)

    if not recommendation and not cost_benefit:
        reason = "no sections found"
    elif not recommendation:
        reason = "missing design recommendation"
    else:
        reason = "missing cost-benefit analysis"
    return NarrativeParseFailure(
        reason=reason,
        recommendation=recommendation,
        cost_benefit_analysis=cost_benefit
    )


class NarrativeClient:
    """Interface for anything that turns a prompt into narrative text"""

    def generate(self, prompt: str, timeout: float, max_output_tokens: int) -> str:
        """
        Returns:
            Free-form reply text

        Raises:
            ExternalServiceDegraded: on any failure, including timeouts
        """
        raise NotImplementedError


class GeminiNarrativeClient(NarrativeClient):
    """
    Narrative generator backed by Google Gemini.
    Without an API key every call reports degradation.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model_name: str = "gemini-1.5-flash",
        temperature: float = 1.0
    ):
        self.model_name = model_name
        self.temperature = temperature
        self.model = None

        if not api_key:
            logger.warning("GOOGLE_API_KEY not set. Narratives will use fallback text.")
            return

        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(
            model_name=model_name,
            system_instruction=SYSTEM_INSTRUCTION
        )
        logger.info(f"Narrative client initialized with {model_name}")

    def generate(self, prompt: str, timeout: float, max_output_tokens: int) -> str:
        if self.model is None:
            raise ExternalServiceDegraded("Narrative model is not configured")

        try:
            response = self.model.generate_content(
                prompt,
                generation_config=genai.GenerationConfig(
                    temperature=self.temperature,
                    max_output_tokens=max_output_tokens
                ),
                request_options={"timeout": timeout}
            )
            text = response.text
        except Exception as e:
            raise ExternalServiceDegraded(f"Gemini request failed: {e}") from e

        if not text or not text.strip():
            raise ExternalServiceDegraded("Gemini returned an empty response")
        return text


class OfflineNarrativeClient(NarrativeClient):
    """Client used when narrative generation is switched off"""

    def generate(self, prompt: str, timeout: float, max_output_tokens: int) -> str:
        raise ExternalServiceDegraded("Narrative generation disabled")
