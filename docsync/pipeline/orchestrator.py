"""End-to-end documentation synchronization run.

Sequences the pipeline: load code, load docs, analyze both, compare,
generate an update for the compared document and optionally save it.
Each early exit is reported through the returned SyncOutcome rather
than an exception; only unexpected errors (such as an unreadable
input directory) propagate to the caller.
"""

import logging
from typing import Optional

from docsync.generators.analyzers import CodeAnalyzer, DocAnalyzer
from docsync.generators.comparison import ComparisonEngine, PairingStrategy
from docsync.generators.llm_client import LLMClient
from docsync.generators.size_guard import InputTooLargeError
from docsync.generators.template_manager import TemplateManager
from docsync.generators.update_gen import UpdateGenerator
from docsync.loaders.file_loader import load_codebase, load_documentation
from docsync.output.markdown import MarkdownWriter
from docsync.pipeline.structure import SyncOutcome, SyncStatus
from docsync.utils.config import AppConfig, ModelConfig

logger = logging.getLogger(__name__)


class Synchronizer:
    """Runs the load, analyze, compare and update pipeline once."""

    def __init__(
        self,
        llm_client: LLMClient,
        models: ModelConfig,
        config: Optional[AppConfig] = None,
        template_manager: Optional[TemplateManager] = None,
        strategy: Optional[PairingStrategy] = None,
    ) -> None:
        """Initialize the synchronizer and its pipeline stages.

        Args:
            llm_client: Client shared by every stage.
            models: Per-stage model table resolved at startup.
            config: Application configuration. Defaults apply if omitted.
            template_manager: Template manager shared by every stage.
            strategy: Pairing policy for the comparison engine.
        """
        self.config = config or AppConfig()
        templates = template_manager or TemplateManager(
            self.config.prompts.templates_dir
        )
        self.code_analyzer = CodeAnalyzer(
            llm_client, models, templates, self.config.prompts
        )
        self.doc_analyzer = DocAnalyzer(
            llm_client, models, templates, self.config.prompts
        )
        self.comparison_engine = ComparisonEngine(
            llm_client, models, templates, strategy
        )
        self.update_generator = UpdateGenerator(
            llm_client, models, templates, self.config.prompts
        )

    def run(
        self,
        code_path: str,
        doc_path: str,
        output_dir: Optional[str] = None,
    ) -> SyncOutcome:
        """Synchronize one document with the codebase.

        Args:
            code_path: Root of the codebase.
            doc_path: Root of the documentation tree.
            output_dir: Where to save the updated document, if anywhere.

        Returns:
            The outcome describing where the run stopped and what it produced.

        Raises:
            OSError: If either input directory cannot be listed.
        """
        code_files = load_codebase(code_path, self.config.loader)
        if not code_files:
            return SyncOutcome(
                status=SyncStatus.NO_CODE_FILES,
                message="No code files found. Exiting.",
            )

        doc_files = load_documentation(doc_path, self.config.loader)
        if not doc_files:
            return SyncOutcome(
                status=SyncStatus.NO_DOC_FILES,
                message="No documentation files found. Exiting.",
            )

        logger.info("Analyzing codebase (this may take a while)...")
        code_analyses = self.code_analyzer.analyze_all(code_files)
        logger.info("Analyzing documentation (this may take a while)...")
        doc_analyses = self.doc_analyzer.analyze_all(doc_files)

        logger.info("Performing comparison (this may take a while)...")
        comparisons = self.comparison_engine.compare(code_analyses, doc_analyses)
        outcome = SyncOutcome(
            status=SyncStatus.NO_COMPARISON,
            code_analyses=code_analyses,
            doc_analyses=doc_analyses,
            comparisons=comparisons,
        )

        if not comparisons or not comparisons[0].comparison:
            outcome.message = (
                "No comparison results generated or comparison failed. "
                "Cannot generate updates."
            )
            return outcome

        first = comparisons[0]
        outcome.doc_path = first.doc_file
        original = next((f for f in doc_files if f.path == first.doc_file), None)
        code_analysis = next(
            (a for a in code_analyses if a.path == first.code_file), None
        )

        if original is None:
            outcome.status = SyncStatus.DOC_NOT_FOUND
            outcome.message = (
                f"Could not find original document content for {first.doc_file}. "
                "Cannot generate updates."
            )
            return outcome

        logger.info(
            "Generating updates for %s (this may take a while)...", first.doc_file
        )
        try:
            update = self.update_generator.generate(
                first.comparison,
                original.content,
                original.path,
                code_analysis.analysis if code_analysis else None,
            )
        except InputTooLargeError as e:
            outcome.status = SyncStatus.NO_UPDATE
            outcome.message = f"No updates generated for {first.doc_file}: {e}"
            return outcome

        if not update.ok or not update.text:
            outcome.status = SyncStatus.NO_UPDATE
            outcome.message = (
                f"No updates generated for {first.doc_file}, or generation failed."
            )
            return outcome

        outcome.status = SyncStatus.UPDATED
        outcome.updated_content = update.text
        outcome.message = f"Suggested updates for: {first.doc_file}"

        if output_dir:
            writer = MarkdownWriter(output_dir)
            try:
                written = writer.write_update(original.path, update.text)
                outcome.written_path = str(written)
            except OSError as e:
                logger.error(
                    "Error saving updated documentation to %s: %s", output_dir, e
                )
                outcome.write_error = str(e)

        return outcome
