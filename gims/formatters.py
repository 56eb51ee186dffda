"""Commit message normalization.

Model output often arrives wrapped in markdown, lists, quotes or emoji.
normalize_message() reduces it to a clean subject line and, when requested,
a plain-text body. Normalizing an already normalized message returns it
unchanged.
"""

import re
from typing import Optional

from gims.models import CommitMessage, GenerationOptions

DEFAULT_SUBJECT = "Update project code"

_FENCED_CODE_RE = re.compile(r"```[\s\S]*?```")
_INLINE_CODE_RE = re.compile(r"`([^`]+)`")
# Any run of bullets, numbering and heading hashes at the start of a line.
# A "*" bullet needs whitespace after it so "**bold**" is not mistaken for one.
_LINE_MARKER_RE = re.compile(
    r"^[ \t]*(?:[-+][ \t]*|\*(?:[ \t]+|$)|\d+\.(?:[ \t]+|$)|#+[ \t]*)+", re.MULTILINE
)
_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"\*(.*?)\*")
_EMOJI_RE = re.compile(
    "["
    "\U0001F300-\U0001FAFF"  # pictographs, emoticons, transport, symbols
    "\u2600-\u27BF"  # misc symbols, dingbats
    "\uFE0F"  # variation selector
    "]"
)
_TAB_CR_RE = re.compile(r"[\t\r]+")
_MULTI_SPACE_RE = re.compile(r"\s{2,}")
_TRAILING_PUNCT_RE = re.compile(r"[\s:,.!;]+$")

# Quote pairs a model may wrap the subject in
_QUOTE_PAIRS = [('"', '"'), ("'", "'"), ("“", "”"), ("‘", "’")]


def _strip_markup_once(text: str) -> str:
    cleaned = _FENCED_CODE_RE.sub("", text)
    cleaned = _INLINE_CODE_RE.sub(r"\1", cleaned)
    cleaned = _EMOJI_RE.sub("", cleaned)
    cleaned = _LINE_MARKER_RE.sub("", cleaned)
    cleaned = _BOLD_RE.sub(r"\1", cleaned)
    cleaned = _ITALIC_RE.sub(r"\1", cleaned)
    cleaned = _TAB_CR_RE.sub(" ", cleaned)
    return cleaned.strip()


def strip_markup(text: str) -> str:
    """Remove markdown, list markers and emoji from model output.

    Removing one layer can expose another ("🚀 - Fix" or "**- Fix**"), so
    the passes repeat until nothing changes.
    """
    cleaned = _strip_markup_once(text)
    while True:
        again = _strip_markup_once(cleaned)
        if again == cleaned:
            return cleaned
        cleaned = again


def _strip_wrapping_quotes(subject: str) -> str:
    for opening, closing in _QUOTE_PAIRS:
        inner = subject[1:-1]
        if (
            len(subject) >= 2
            and subject.startswith(opening)
            and subject.endswith(closing)
            and opening not in inner
            and closing not in inner
        ):
            return inner.strip()
    return subject


def clean_subject(line: str) -> str:
    """Collapse whitespace and strip wrapping quotes and trailing punctuation.

    Nested quote pairs and punctuation on either side of a quote are all
    removed.
    """
    subject = _MULTI_SPACE_RE.sub(" ", line).strip()
    previous = None
    while subject != previous:
        previous = subject
        subject = _TRAILING_PUNCT_RE.sub("", subject)
        subject = _strip_wrapping_quotes(subject).strip()
    return subject


def _derive_subject(line: str) -> str:
    # Unwrapping quotes can expose markup ('"- Fix bug"'), and the reverse
    subject = clean_subject(line)
    while True:
        again = clean_subject(strip_markup(subject))
        if again == subject:
            return subject
        subject = again


def normalize_message(raw_text: Optional[str], options: GenerationOptions) -> CommitMessage:
    """Normalize raw model output into a commit message.

    Args:
        raw_text: The raw completion text.
        options: Only `body` is consulted; without it the body is dropped.

    Returns:
        CommitMessage with a non-empty subject and, if requested, a body.
    """
    lines = [line.strip() for line in strip_markup(raw_text or "").split("\n")]
    lines = [line for line in lines if line]

    subject = _derive_subject(lines[0]) if lines else ""
    if not subject:
        subject = DEFAULT_SUBJECT

    if not options.body:
        return CommitMessage(subject=subject)

    body = "\n".join(lines[1:]).strip()
    return CommitMessage(subject=subject, body=body or None)
