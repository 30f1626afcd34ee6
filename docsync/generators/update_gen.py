"""Generation of rewritten documentation from a comparison report."""

import logging
from typing import Optional

from docsync.generators.llm_client import LLMClient
from docsync.generators.size_guard import enforce_input_limit
from docsync.generators.template_manager import TemplateManager
from docsync.pipeline.structure import CompletionResult
from docsync.utils.config import ModelConfig, PromptConfig

logger = logging.getLogger(__name__)

UPDATE_SYSTEM_PROMPT = (
    "You are an expert technical writing assistant specializing in "
    "updating documentation."
)


class UpdateGenerator:
    """Produces a complete replacement Markdown document via the LLM.

    The response is returned verbatim; no check is made that it is
    well-formed Markdown or that it differs from the original.
    """

    def __init__(
        self,
        llm_client: LLMClient,
        models: ModelConfig,
        template_manager: Optional[TemplateManager] = None,
        prompt_config: Optional[PromptConfig] = None,
    ) -> None:
        self.llm = llm_client
        self.models = models
        self.templates = template_manager or TemplateManager()
        self.prompt_config = prompt_config or PromptConfig()

    def generate(
        self,
        comparison: str,
        original_doc: str,
        doc_path: str,
        code_analysis: Optional[str] = None,
    ) -> CompletionResult:
        """Generate the updated document.

        Args:
            comparison: Comparison report describing the discrepancies.
            original_doc: Current text of the document.
            doc_path: Path of the document, used for context in the prompt.
            code_analysis: Optional analysis of the paired code file.

        Returns:
            The completion result whose text is the replacement Markdown.

        Raises:
            InputTooLargeError: If the original document exceeds the
                configured limit under the reject policy.
        """
        original_doc = enforce_input_limit(
            original_doc,
            self.prompt_config.max_input_chars,
            self.prompt_config.oversize_policy,
            label=doc_path,
        )
        prompt = self.templates.render_update_prompt(
            doc_path=doc_path,
            comparison=comparison,
            original_doc=original_doc,
            code_analysis=code_analysis,
        )
        result = self.llm.complete(
            prompt,
            self.models.for_stage("update_generation"),
            system=UPDATE_SYSTEM_PROMPT,
        )
        if result.ok:
            logger.info("Generated updated documentation for %s", doc_path)
        else:
            logger.warning("No update generated for %s (%s)", doc_path, result.error)
        return result
