"""Comparison of code analyses against documentation analyses.

Which code analysis is compared with which doc analysis is decided by
a PairingStrategy. The default strategy pairs the first code analysis
with the first doc analysis, which is the intentionally minimal
policy; a many-to-many matcher can replace it without touching the
orchestrator.
"""

import logging
from typing import Optional, Protocol

from docsync.generators.llm_client import LLMClient
from docsync.generators.template_manager import TemplateManager
from docsync.pipeline.structure import (
    AnalysisRecord,
    ComparisonRecord,
    CompletionResult,
    FailureKind,
)
from docsync.utils.config import ModelConfig

logger = logging.getLogger(__name__)

COMPARISON_SYSTEM_PROMPT = "You are a meticulous comparison assistant."

AnalysisPair = tuple[AnalysisRecord, AnalysisRecord]


class PairingStrategy(Protocol):
    """Decides which code/doc analysis pairs get compared."""

    def select_pairs(
        self,
        code_analyses: list[AnalysisRecord],
        doc_analyses: list[AnalysisRecord],
    ) -> list[AnalysisPair]: ...


class FirstPairStrategy:
    """Pairs the first code analysis with the first doc analysis."""

    def select_pairs(
        self,
        code_analyses: list[AnalysisRecord],
        doc_analyses: list[AnalysisRecord],
    ) -> list[AnalysisPair]:
        if not code_analyses or not doc_analyses:
            logger.warning("Not enough analyses to perform a comparison.")
            return []
        return [(code_analyses[0], doc_analyses[0])]


class ComparisonEngine:
    """Asks the LLM to contrast a code analysis with a doc analysis."""

    def __init__(
        self,
        llm_client: LLMClient,
        models: ModelConfig,
        template_manager: Optional[TemplateManager] = None,
        strategy: Optional[PairingStrategy] = None,
    ) -> None:
        """Initialize the comparison engine.

        Args:
            llm_client: The LLM client for API calls.
            models: Per-stage model table resolved at startup.
            template_manager: Template manager for prompts.
            strategy: Pairing policy. Defaults to FirstPairStrategy.
        """
        self.llm = llm_client
        self.models = models
        self.templates = template_manager or TemplateManager()
        self.strategy = strategy or FirstPairStrategy()

    def compare_pair(
        self, code: AnalysisRecord, doc: AnalysisRecord
    ) -> CompletionResult:
        """Run a single comparison.

        Args:
            code: Analysis of the code file. Its analysis must be set.
            doc: Analysis of the doc file. Its analysis must be set.

        Returns:
            The completion result holding the comparison report.
        """
        prompt = self.templates.render_comparison_prompt(
            code_path=code.path,
            code_analysis=code.analysis or "",
            doc_path=doc.path,
            doc_analysis=doc.analysis or "",
        )
        return self.llm.complete(
            prompt,
            self.models.for_stage("comparison"),
            system=COMPARISON_SYSTEM_PROMPT,
        )

    def compare(
        self,
        code_analyses: list[AnalysisRecord],
        doc_analyses: list[AnalysisRecord],
    ) -> list[ComparisonRecord]:
        """Compare the pairs chosen by the pairing strategy.

        Pairs where either side has no analysis text are skipped with a
        warning. Errors during a comparison are recorded on the
        resulting ComparisonRecord rather than raised.

        Args:
            code_analyses: Analyses of code files.
            doc_analyses: Analyses of documentation files.

        Returns:
            One ComparisonRecord per compared pair.
        """
        results = []
        for code, doc in self.strategy.select_pairs(code_analyses, doc_analyses):
            if not code.analysis or not doc.analysis:
                logger.warning(
                    "Skipping comparison due to missing analysis content for %s or %s",
                    code.path,
                    doc.path,
                )
                continue

            logger.info(
                'Comparing code analysis for "%s" with doc analysis for "%s"',
                code.path,
                doc.path,
            )
            try:
                result = self.compare_pair(code, doc)
            except Exception as e:
                logger.exception(
                    "Error during comparison for %s and %s", code.path, doc.path
                )
                result = CompletionResult.failure(
                    FailureKind.EXCEPTION, f"Error during comparison: {e}"
                )

            if not result.ok:
                logger.warning(
                    "Comparison of %s and %s produced no report (%s)",
                    code.path,
                    doc.path,
                    result.error,
                )
            results.append(
                ComparisonRecord(
                    code_file=code.path,
                    doc_file=doc.path,
                    comparison=result.text,
                    error=result.error,
                )
            )

        return results
