"""AI Documentation Synchronizer.

An LLM-powered tool that analyzes a codebase and its Markdown
documentation, compares the two and proposes an updated document
using an OpenAI-compatible chat-completion API.
"""

__version__ = "0.1.0"
