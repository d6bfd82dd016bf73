# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `PinionCompleter`, a Prompt Toolkit completer driven by the same
completion resolver as `--completion-bash`.

The text before the cursor is split shell-style; when the cursor sits after
whitespace an empty word is appended so the resolver completes a fresh token.
Suggestions are filtered by the word under the cursor and inserted using
longest-common-prefix logic, quoting values that contain whitespace.

Example:
    session = PromptSession(completer=PinionCompleter(app))
"""
from __future__ import annotations

import os
import shlex
from typing import TYPE_CHECKING, Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from pinion.exceptions import DeclarationError

if TYPE_CHECKING:
    from pinion.application import Application


class PinionCompleter(Completer):
    """
    Prompt Toolkit completer for a Pinion application's command line.

    Args:
        app (Application): The application whose flags, arguments and commands
            are completed.
    """

    def __init__(self, app: Application):
        self.app = app

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        text = document.text_before_cursor
        try:
            words = shlex.split(text)
        except ValueError:
            return

        cursor_at_end_of_token = not text or text.endswith((" ", "\t"))
        if cursor_at_end_of_token:
            words.append("")
        stub = words[-1]

        try:
            suggestions = self.app.completion_options(words)
        except DeclarationError:
            return
        yield from self._yield_lcp_completions(suggestions, stub)

    def _ensure_quote(self, text: str) -> str:
        """Quote suggestions containing whitespace so they stay one shell word."""
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(self, suggestions: list[str], stub: str):
        """
        Yield completions for the current stub using longest-common-prefix logic.

        Behavior:
        - If only one match, yield it fully.
        - If multiple matches share a longer prefix, insert the prefix and also
          list every match.
        - Otherwise list every match individually.
        """
        matches = [s for s in suggestions if s.startswith(stub)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)

        if len(matches) == 1:
            yield Completion(
                self._ensure_quote(matches[0]),
                start_position=-len(stub),
                display=matches[0],
            )
        elif len(lcp) > len(stub) and not lcp.startswith("-"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
        else:
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
