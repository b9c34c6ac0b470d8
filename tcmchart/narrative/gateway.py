# tcmchart/narrative/gateway.py
from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Dict, List

from tcmchart.chart.errors import ChartError
from tcmchart.chart.schema import PatientRecord
from tcmchart.llm import LLMClient
from tcmchart.narrative.prompts import (
    build_diagnosis_messages,
    build_hpi_messages,
    build_soap_messages,
)

logger = logging.getLogger(__name__)


class NarrativeKind(str, Enum):
    HPI = "hpi"
    DIAGNOSIS = "diagnosis"
    SOAP_NOTE = "soap_note"


PLACEHOLDERS: Dict[NarrativeKind, str] = {
    NarrativeKind.HPI: (
        "Error generating summary. Please fill in manually or check API configuration."
    ),
    NarrativeKind.DIAGNOSIS: (
        "Failed to generate AI diagnosis. Please fill in manually or check API configuration."
    ),
    NarrativeKind.SOAP_NOTE: (
        "Failed to generate SOAP note. Please check API configuration."
    ),
}

_PROMPTS: Dict[NarrativeKind, Callable[[PatientRecord], List[Dict[str, str]]]] = {
    NarrativeKind.HPI: build_hpi_messages,
    NarrativeKind.DIAGNOSIS: build_diagnosis_messages,
    NarrativeKind.SOAP_NOTE: build_soap_messages,
}


class NarrativeGenerationError(ChartError):
    def __init__(self, kind: NarrativeKind, reason: str):
        super().__init__(f"Failed to generate {kind.value}: {reason}")
        self.kind = kind
        self.reason = reason


class GenerationInProgressError(ChartError):
    def __init__(self, kind: NarrativeKind):
        super().__init__(f"A narrative is already being generated; {kind.value} was not started")
        self.kind = kind


class NarrativeGateway:
    """
    Drafts chart narratives through an LLM.

    At most one call is in flight per gateway; a second caller is refused
    rather than queued. Failures are not retried.
    """

    def __init__(self, llm_client: LLMClient):
        self.llm_client = llm_client
        self._busy = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._busy.locked()

    def generate(self, kind: NarrativeKind, record: PatientRecord) -> str:
        kind = NarrativeKind(kind)
        if not self._busy.acquire(blocking=False):
            raise GenerationInProgressError(kind)

        try:
            messages = _PROMPTS[kind](record)
            try:
                text = self.llm_client.chat(messages)
            except Exception as e:
                logger.error("Narrative %s failed for file %s: %s", kind.value, record.file_no, e)
                raise NarrativeGenerationError(kind, str(e)) from e

            text = (text or "").strip()
            if not text:
                raise NarrativeGenerationError(kind, "empty response")

            logger.info(
                "Generated %s for file %s (%d chars)", kind.value, record.file_no, len(text)
            )
            return text
        finally:
            self._busy.release()

    def generate_or_placeholder(self, kind: NarrativeKind, record: PatientRecord) -> str:
        """
        Like generate(), but returns the placeholder text for `kind` when
        generation fails.
        """
        kind = NarrativeKind(kind)
        try:
            return self.generate(kind, record)
        except NarrativeGenerationError:
            return PLACEHOLDERS[kind]
