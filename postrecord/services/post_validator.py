import re
from typing import Iterable, List, Optional

from postrecord.errors import (
    EmptyTitle,
    PostValidationError,
    UnbalancedCodeFence,
    UnknownLayout,
    UnrecognizedField,
)
from postrecord.schemas.post import Post

_FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")


def find_validation_errors(
    post: Post, allowed_layouts: Iterable[str]
) -> List[PostValidationError]:
    allowed = set(allowed_layouts)
    errors: List[PostValidationError] = []
    if not post.title.strip():
        errors.append(EmptyTitle())
    if post.layout not in allowed:
        errors.append(UnknownLayout(post.layout, allowed))
    return errors


def validate(post: Post, allowed_layouts: Iterable[str]) -> None:
    """Raise the first validation error for `post`, if any."""
    errors = find_validation_errors(post, allowed_layouts)
    if errors:
        raise errors[0]


def find_unclosed_fence(body: str) -> Optional[UnbalancedCodeFence]:
    """Return the fenced code block left open at the end of `body`, if any."""
    opening = None  # (line_number, fence)
    for line_number, line in enumerate(body.splitlines(), start=1):
        match = _FENCE_PATTERN.match(line)
        if not match:
            continue
        fence, info = match.groups()
        if opening is None:
            # backtick fences cannot carry backticks in their info string
            if fence[0] == "`" and "`" in info:
                continue
            opening = (line_number, fence)
        elif (
            fence[0] == opening[1][0]
            and len(fence) >= len(opening[1])
            and not info.strip()
        ):
            opening = None

    if opening is None:
        return None
    return UnbalancedCodeFence(*opening)


def lint(post: Post, allowed_layouts: Iterable[str]) -> List[PostValidationError]:
    """All advisory findings for a parsed post. Never raises."""
    findings = find_validation_errors(post, allowed_layouts)
    findings.extend(UnrecognizedField(name) for name in post.extra)
    unclosed = find_unclosed_fence(post.body)
    if unclosed:
        findings.append(unclosed)
    return findings
