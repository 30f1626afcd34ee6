"""Per-file LLM analysis of source code and documentation.

Each analyzer renders a fixed prompt around one file's full text,
sends it to the LLM client and records the outcome. Files are
processed one at a time, and every input file yields exactly one
AnalysisRecord whether or not the call succeeded.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

from docsync.generators.llm_client import LLMClient
from docsync.generators.size_guard import InputTooLargeError, enforce_input_limit
from docsync.generators.template_manager import TemplateManager
from docsync.pipeline.structure import (
    AnalysisRecord,
    CompletionResult,
    FailureKind,
    SourceFile,
)
from docsync.utils.config import ModelConfig, PromptConfig

logger = logging.getLogger(__name__)

CODE_SYSTEM_PROMPT = "You are an expert code analysis assistant."
DOC_SYSTEM_PROMPT = "You are an expert documentation analysis assistant."

# extension -> (language name, code fence info string)
_LANGUAGES: dict[str, tuple[str, str]] = {
    ".js": ("JavaScript", "javascript"),
    ".mjs": ("JavaScript", "javascript"),
    ".cjs": ("JavaScript", "javascript"),
    ".jsx": ("JavaScript (JSX)", "jsx"),
    ".ts": ("TypeScript", "typescript"),
    ".tsx": ("TypeScript (TSX)", "tsx"),
    ".py": ("Python", "python"),
}


class FileAnalyzer(ABC):
    """Base class for analyzers that summarize one file per LLM call.

    Subclasses set ``stage``, ``system_prompt`` and ``kind`` and
    implement ``render_prompt``. The base class cannot be instantiated.
    """

    stage = ""
    system_prompt = ""
    kind = "file"

    def __init__(
        self,
        llm_client: LLMClient,
        models: ModelConfig,
        template_manager: Optional[TemplateManager] = None,
        prompt_config: Optional[PromptConfig] = None,
    ) -> None:
        """Initialize the analyzer.

        Args:
            llm_client: The LLM client for API calls.
            models: Per-stage model table resolved at startup.
            template_manager: Template manager for prompts. Creates
                a default instance if not provided.
            prompt_config: Size limit settings. Defaults apply if omitted.
        """
        self.llm = llm_client
        self.models = models
        self.templates = template_manager or TemplateManager()
        self.prompt_config = prompt_config or PromptConfig()

    @property
    def model(self) -> str:
        return self.models.for_stage(self.stage)

    @abstractmethod
    def render_prompt(self, source: SourceFile) -> str:
        """Build the analysis prompt for one file."""

    def analyze_file(self, source: SourceFile) -> CompletionResult:
        """Analyze a single file.

        Args:
            source: The file to analyze.

        Returns:
            The completion result for the file.

        Raises:
            InputTooLargeError: If the file exceeds the configured limit
                under the reject policy.
        """
        content = enforce_input_limit(
            source.content,
            self.prompt_config.max_input_chars,
            self.prompt_config.oversize_policy,
            label=source.path,
        )
        prompt = self.render_prompt(SourceFile(path=source.path, content=content))
        return self.llm.complete(prompt, self.model, system=self.system_prompt)

    def analyze_all(self, sources: list[SourceFile]) -> list[AnalysisRecord]:
        """Analyze every file in order, one at a time.

        Args:
            sources: Files to analyze.

        Returns:
            One AnalysisRecord per input file, in input order.
        """
        analyses = []
        for source in sources:
            logger.info("Analyzing %s file: %s", self.kind, source.path)
            try:
                result = self.analyze_file(source)
            except InputTooLargeError as e:
                logger.warning("Skipping analysis of %s: %s", source.path, e)
                result = CompletionResult.failure(FailureKind.INPUT_TOO_LARGE, str(e))
            except Exception as e:
                logger.exception("Error analyzing %s file %s", self.kind, source.path)
                result = CompletionResult.failure(
                    FailureKind.EXCEPTION, f"Error during analysis: {e}"
                )

            if not result.ok:
                logger.warning(
                    "Analysis returned no text for %s (%s)", source.path, result.error
                )
            analyses.append(AnalysisRecord.from_result(source.path, result))

        return analyses


class CodeAnalyzer(FileAnalyzer):
    """Summarizes purpose, key functions and classes, inputs and outputs of code."""

    stage = "code_analysis"
    system_prompt = CODE_SYSTEM_PROMPT
    kind = "code"

    def render_prompt(self, source: SourceFile) -> str:
        ext = os.path.splitext(source.path)[1].lower()
        language, fence = _LANGUAGES.get(ext, ("source", ext.lstrip(".")))
        return self.templates.render_code_analysis_prompt(
            file_path=source.path,
            content=source.content,
            language=language,
            fence_lang=fence,
        )


class DocAnalyzer(FileAnalyzer):
    """Summarizes topics, structure and code-related sections of Markdown docs."""

    stage = "doc_analysis"
    system_prompt = DOC_SYSTEM_PROMPT
    kind = "documentation"

    def render_prompt(self, source: SourceFile) -> str:
        return self.templates.render_doc_analysis_prompt(
            file_path=source.path, content=source.content
        )
