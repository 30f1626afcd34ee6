"""Data models for the documentation synchronization pipeline.

Defines the records that flow between the loaders, analyzers, the
comparison engine and the update generator. All records are frozen;
each stage produces new ones instead of mutating its input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    """Why a completion call produced no text."""

    NOT_CONFIGURED = "not_configured"
    EMPTY_RESPONSE = "empty_response"
    API_ERROR = "api_error"
    INPUT_TOO_LARGE = "input_too_large"
    EXCEPTION = "exception"


@dataclass(frozen=True)
class LLMError:
    """Structured description of a failed completion.

    Attributes:
        kind: Category of the failure.
        message: Human-readable detail.
    """

    kind: FailureKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class SourceFile:
    """A file read from disk.

    Attributes:
        path: Path of the file as discovered during the walk.
        content: Full UTF-8 decoded text.
    """

    path: str
    content: str


@dataclass(frozen=True)
class CompletionResult:
    """Outcome of a single completion call.

    Exactly one of ``text`` and ``error`` is set.

    Attributes:
        text: The trimmed response text on success.
        error: The failure description otherwise.
        input_tokens: Prompt tokens reported by the backend.
        output_tokens: Completion tokens reported by the backend.
    """

    text: Optional[str] = None
    error: Optional[LLMError] = None
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None

    @classmethod
    def success(
        cls, text: str, input_tokens: int = 0, output_tokens: int = 0
    ) -> CompletionResult:
        return cls(text=text, input_tokens=input_tokens, output_tokens=output_tokens)

    @classmethod
    def failure(cls, kind: FailureKind, message: str) -> CompletionResult:
        return cls(error=LLMError(kind=kind, message=message))


@dataclass(frozen=True)
class AnalysisRecord:
    """LLM analysis of one source or documentation file.

    Attributes:
        path: Path of the analyzed SourceFile.
        analysis: The analysis text, or None if the call failed.
        error: Why the analysis is missing, if it is.
    """

    path: str
    analysis: Optional[str] = None
    error: Optional[LLMError] = None

    @classmethod
    def from_result(cls, path: str, result: CompletionResult) -> AnalysisRecord:
        return cls(path=path, analysis=result.text, error=result.error)


@dataclass(frozen=True)
class ComparisonRecord:
    """LLM comparison between one code analysis and one doc analysis.

    Attributes:
        code_file: Path of the compared code file.
        doc_file: Path of the compared documentation file.
        comparison: The comparison report, or None if the call failed.
        error: Why the report is missing, if it is.
    """

    code_file: str
    doc_file: str
    comparison: Optional[str] = None
    error: Optional[LLMError] = None


class SyncStatus(str, Enum):
    """Terminal state of a synchronization run."""

    NO_CODE_FILES = "no_code_files"
    NO_DOC_FILES = "no_doc_files"
    NO_COMPARISON = "no_comparison"
    DOC_NOT_FOUND = "doc_not_found"
    NO_UPDATE = "no_update"
    UPDATED = "updated"


@dataclass
class SyncOutcome:
    """Everything a synchronization run produced.

    Attributes:
        status: Where the pipeline stopped.
        message: Explanation suitable for the console.
        doc_path: The document the update targets, when one was chosen.
        updated_content: Suggested replacement Markdown.
        written_path: Where the update was saved, if it was.
        write_error: Why saving failed, if it did.
        code_analyses: Analyses produced for code files.
        doc_analyses: Analyses produced for documentation files.
        comparisons: Comparison records produced.
    """

    status: SyncStatus
    message: str = ""
    doc_path: Optional[str] = None
    updated_content: Optional[str] = None
    written_path: Optional[str] = None
    write_error: Optional[str] = None
    code_analyses: list[AnalysisRecord] = field(default_factory=list)
    doc_analyses: list[AnalysisRecord] = field(default_factory=list)
    comparisons: list[ComparisonRecord] = field(default_factory=list)
