# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Completion hints attached to flags and arguments."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, Iterable

HintAction = Callable[[], Iterable[str]]


@dataclass
class Completion:
    """
    Describes what a shell may offer for a partially typed token.

    Attributes:
        directories (bool): Offer directory names.
        files (bool): Offer file names.
        word_actions (list[HintAction]): Callables returning candidate words.
            They are evaluated lazily by `resolve_words()`.
    """

    directories: bool = False
    files: bool = False
    word_actions: list[HintAction] = field(default_factory=list)

    def add_words(self, *words: str) -> None:
        self.word_actions.append(lambda: words)

    def empty(self) -> bool:
        return not self.directories and not self.files and not self.word_actions

    def resolve_words(self) -> list[str]:
        words: list[str] = []
        for action in self.word_actions:
            words.extend(action())
        return sorted(words)

    def generate_bash_string(self) -> str:
        """
        Render the completion as arguments for bash's `compgen`.

        Directories and files become `-d` / `-f`; words become `-W` followed by
        the words joined with the first character of `$IFS` (a newline when
        `$IFS` is unset or contains one).
        """
        if self.empty():
            return ""

        result = ""
        if self.directories:
            result += "-d "
        if self.files:
            result += "-f "
        if self.word_actions:
            ifs = os.getenv("IFS", "")
            if not ifs or "\n" in ifs:
                ifs = "\n"
            else:
                ifs = ifs[0]
            result += "-W " + ifs.join(self.resolve_words())
        return result


def merge_completions(first: Completion, second: Completion) -> Completion:
    return Completion(
        directories=first.directories or second.directories,
        files=first.files or second.files,
        word_actions=[*first.word_actions, *second.word_actions],
    )


class CompletionMixin:
    """
    Adds user declared completion hints to a clause.

    A user declared completion always replaces the one inferred from the
    clause's value type; the two are never merged.
    """

    user_completion: Completion

    def _init_completion(self) -> None:
        self.user_completion = Completion()

    def hint_options(self, *options: str):
        """Offer a fixed list of words."""
        self.user_completion.add_words(*options)
        return self

    def hint_action(self, action: HintAction):
        """Offer the words returned by `action` at completion time."""
        self.user_completion.word_actions.append(action)
        return self

    def hint_files(self):
        self.user_completion.files = True
        return self

    def hint_directories(self):
        self.user_completion.directories = True
        return self

    def builtin_completion(self) -> Completion:
        return Completion()

    def resolve_completion(self) -> Completion:
        if not self.user_completion.empty():
            return self.user_completion
        return self.builtin_completion()

    def resolve_words(self) -> list[str]:
        return self.resolve_completion().resolve_words()
