"""OpenAI wrapper.

Turns the keyword list of a medical report into a plain-language summary.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from openai import OpenAI, OpenAIError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an AI assistant specializing in medical report interpretation. Your task is to analyze an array of keywords extracted from a user-uploaded medical report and provide a clear, easily understandable summary. Your response should:

1. Be tailored for individuals without medical expertise
2. Explain each key finding or test result in simple terms
3. Provide context for normal ranges and interpret values that are out of range
4. Describe potential implications or next steps for abnormal results
5. Use bullet points or numbered lists for clarity
6. Organize information into logical sections (e.g., "Blood Tests", "Imaging Results")
7. Highlight any critical or urgent findings
8. Avoid medical jargon, or explain it when necessary
9. Include a brief disclaimer about consulting a healthcare professional for personalized advice

Format your response with appropriate headers, subheaders, and spacing to enhance readability. If there are multiple related items, group them together for a more coherent explanation.

Remember, your goal is to inform and educate, not to diagnose or provide medical advice. Always encourage the user to discuss the results with their healthcare provider for a comprehensive interpretation and personalized recommendations."""


class SummaryError(Exception):
    """The language model did not produce a summary."""


def build_messages(keywords: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": f"Keywords: {keywords}"},
    ]


class ReportSummarizer:
    def __init__(self, client: Any, model: str, max_tokens: int = 1500, temperature: float = 0.7):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    @classmethod
    def from_config(cls, config) -> "ReportSummarizer":
        key = (config.get("OPENAI_API_KEY") or "").strip()
        client = OpenAI(api_key=key) if key else None
        return cls(
            client,
            model=config.get("OPENAI_MODEL") or "gpt-3.5-turbo",
            max_tokens=config.get("SUMMARY_MAX_TOKENS", 1500),
            temperature=config.get("SUMMARY_TEMPERATURE", 0.7),
        )

    @property
    def ready(self) -> bool:
        return self.client is not None

    def summarize(self, keywords: str) -> str:
        """Ask the model for a lay summary of ``keywords``.

        An empty keyword list is still sent; the model decides what to say
        about a report with no readable text.
        """
        if self.client is None:
            raise SummaryError("OPENAI_API_KEY is missing")
        try:
            res = self.client.chat.completions.create(
                model=self.model,
                messages=build_messages(keywords),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except OpenAIError as e:
            raise SummaryError(f"LLM request failed: {type(e).__name__}: {e}") from e
        if not res.choices:
            raise SummaryError("LLM returned no choices")
        content = (res.choices[0].message.content or "").strip()
        if not content:
            raise SummaryError("LLM returned an empty message")
        logger.debug("Summary generated (%d chars)", len(content))
        return content
