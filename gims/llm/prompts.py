"""Prompt construction for commit message generation.

The prompt tells the model how much of the change it is seeing: each
reduction strategy has its own lead sentence.
"""

from gims.models import GenerationOptions, ReductionStrategy

LEAD_SENTENCES = {
    ReductionStrategy.FULL: "Write a concise git commit message for these changes:",
    ReductionStrategy.SUMMARY: (
        "Write a concise git commit message for these changes. The diff is too large "
        "to show, so here is a per-file summary of lines added and removed:"
    ),
    ReductionStrategy.STATUS: (
        "Write a concise git commit message for these changes. Only the names of the "
        "changed files are available, grouped by kind of change:"
    ),
    ReductionStrategy.TRUNCATED: (
        "Write a concise git commit message for these changes. The listing below was "
        "cut short because of its size, so it is incomplete:"
    ),
    ReductionStrategy.FALLBACK: (
        "Write a concise git commit message for a large change. No file details are "
        "available, only this description:"
    ),
}

CONVENTIONAL_DIRECTIVE = "Use Conventional Commits format (e.g., feat:, fix:, chore:) for the subject."
PLAIN_DIRECTIVE = "Subject must be a single short imperative line."

BODY_DIRECTIVE = (
    "Provide a short subject line followed by a blank line and an optional explanatory body."
)
SUBJECT_ONLY_DIRECTIVE = "Return only a short subject line without surrounding quotes."


def build_prompt(content: str, strategy: ReductionStrategy, options: GenerationOptions) -> str:
    """Build the instruction string sent to a language model.

    Args:
        content: The (possibly reduced) change content.
        strategy: The reduction strategy that produced the content.
        options: Style options (conventional, body).

    Returns:
        The complete prompt.
    """
    style = CONVENTIONAL_DIRECTIVE if options.conventional else PLAIN_DIRECTIVE
    body = BODY_DIRECTIVE if options.body else SUBJECT_ONLY_DIRECTIVE

    return f"{LEAD_SENTENCES[strategy]}\n{content}\n\n{style} {body}"
