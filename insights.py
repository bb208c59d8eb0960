"""Best-effort advisory text about a finished calculation.

Insights are an annotation on top of a ``CalculationResult``; they never
change the numbers, and any failure here yields an empty list.
"""
import logging
from typing import List, Optional

import httpx

import config
from models import CalculationResult

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an academic advisor specializing in transfer student success and degree planning."


def _fmt_gpa(value: Optional[float]) -> str:
    return "N/A" if value is None else f"{value:.2f}"


def build_prompt(result: CalculationResult, student_name: Optional[str] = None) -> str:
    b = result.breakdown
    institutions = []
    for course in result.course_details:
        if course.is_transfer and course.institution_name and course.institution_name not in institutions:
            institutions.append(course.institution_name)

    return "\n".join([
        "Analyze this student's academic record:",
        "",
        f"Student: {student_name or 'Transfer Student'}",
        f"Cumulative GPA: {_fmt_gpa(result.cumulative)}",
        f"Institutional GPA: {_fmt_gpa(result.institutional)}",
        f"Transfer GPA: {_fmt_gpa(result.transfer)}",
        "",
        f"Credits: {b.total_credits:g} total ({b.institutional_credits:g} institutional, "
        f"{b.transfer_credits:g} transfer)",
        f"Transfer Institutions: {', '.join(institutions) or 'None'}",
        "",
        "Provide 3-4 short insights about academic progression, credit utilization "
        "and transfer credit optimization. One insight per line.",
    ])


class InsightClient:
    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 model: Optional[str] = None, timeout: Optional[float] = None):
        self.api_key = config.OPENAI_API_KEY if api_key is None else api_key
        self.base_url = (base_url or config.OPENAI_BASE_URL).rstrip("/")
        self.model = model or config.OPENAI_MODEL
        self.timeout = timeout or config.INSIGHTS_TIMEOUT

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def generate(self, result: CalculationResult, student_name: Optional[str] = None) -> List[str]:
        if not self.enabled:
            logger.info("Insights disabled - no API key configured")
            return []

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(result, student_name)},
            ],
            "temperature": 0.3,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            with httpx.Client(timeout=self.timeout) as client:
                resp = client.post(f"{self.base_url}/chat/completions", json=payload, headers=headers)
                resp.raise_for_status()
                content = resp.json()["choices"][0]["message"]["content"]
        except (httpx.HTTPError, KeyError, IndexError, ValueError) as e:
            logger.error("Insight generation failed: %s", e)
            return []

        if not isinstance(content, str):
            logger.error("Insight generation returned no text content")
            return []

        return [line.strip() for line in content.splitlines() if line.strip()]
