"""Jinja2 rendering of the four prompts sent during a sync run.

The code analysis, doc analysis, comparison and update prompts live as
`.j2` files in the package templates/ directory; a config setting can
point at a replacement directory with the same file names.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

logger = logging.getLogger(__name__)

_DEFAULT_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


class TemplateManager:
    """Loads and renders Jinja2 prompt templates for the sync pipeline.

    File contents and analysis texts are passed as template variables,
    never compiled as template source, so braces in code are safe.
    """

    def __init__(self, templates_dir: Optional[str] = None) -> None:
        """Initialize the template manager.

        Args:
            templates_dir: Path to the templates directory. Uses the
                packaged templates/ directory if not specified.
        """
        self.templates_dir = (
            Path(templates_dir) if templates_dir else _DEFAULT_TEMPLATES_DIR
        )

        if not self.templates_dir.exists():
            logger.warning(
                "Prompt template directory %s does not exist", self.templates_dir
            )

        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            autoescape=False,
        )
        logger.debug("Loading prompt templates from %s", self.templates_dir)

    def render_code_analysis_prompt(
        self,
        file_path: str,
        content: str,
        language: str = "JavaScript",
        fence_lang: str = "javascript",
    ) -> str:
        """Render the prompt asking for a summary of one code file.

        Args:
            file_path: Path of the code file.
            content: Full text of the file.
            language: Language name used in the instruction.
            fence_lang: Info string for the Markdown code fence.

        Returns:
            The prompt text.
        """
        return self._render(
            "code_analysis.j2",
            file_path=file_path,
            content=content,
            language=language,
            fence_lang=fence_lang,
        )

    def render_doc_analysis_prompt(self, file_path: str, content: str) -> str:
        """Render the prompt asking for a summary of one Markdown file."""
        return self._render("doc_analysis.j2", file_path=file_path, content=content)

    def render_comparison_prompt(
        self,
        code_path: str,
        code_analysis: str,
        doc_path: str,
        doc_analysis: str,
    ) -> str:
        """Render the prompt comparing a code analysis with a doc analysis.

        Args:
            code_path: Path of the analyzed code file.
            code_analysis: Analysis text of the code file.
            doc_path: Path of the analyzed documentation file.
            doc_analysis: Analysis text of the documentation file.

        Returns:
            The prompt text.
        """
        return self._render(
            "comparison.j2",
            code_path=code_path,
            code_analysis=code_analysis,
            doc_path=doc_path,
            doc_analysis=doc_analysis,
        )

    def render_update_prompt(
        self,
        doc_path: str,
        comparison: str,
        original_doc: str,
        code_analysis: Optional[str] = None,
    ) -> str:
        """Render the prompt requesting a full rewrite of a document.

        Args:
            doc_path: Path of the document being rewritten.
            comparison: The comparison report.
            original_doc: Current text of the document.
            code_analysis: Optional analysis of the paired code file.

        Returns:
            The prompt text.
        """
        return self._render(
            "update.j2",
            doc_path=doc_path,
            comparison=comparison,
            original_doc=original_doc,
            code_analysis=code_analysis or "",
        )

    def _render(self, template_name: str, **kwargs: Any) -> str:
        """Render one prompt file.

        Raises:
            jinja2.TemplateNotFound: If the file is missing.
            jinja2.UndefinedError: If the file uses a variable not supplied.
        """
        prompt = self._env.get_template(template_name).render(**kwargs)
        logger.debug("Prompt %s rendered to %d characters", template_name, len(prompt))
        return prompt

    def list_templates(self) -> list[str]:
        """Names of the template files found in the template directory."""
        return self._env.list_templates()
