from __future__ import annotations

from typing import Callable

Confirm = Callable[[str], bool]


def ask_yes_no(question: str, *, default: bool = True) -> bool:
    """Block on stdin for a yes/no answer. Empty input or EOF takes the default."""

    suffix = "[Y/n]" if default else "[y/N]"
    try:
        answer = input(f"{question} {suffix}: ")
    except EOFError:
        return default

    answer = answer.strip().lower()
    if not answer:
        return default
    if answer in {"n", "no"}:
        return False
    if answer in {"y", "yes"}:
        return True
    return default
