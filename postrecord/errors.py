"""
Exceptions raised while ingesting a post.

PostError
├── ParseError              - document cannot become a Post
│   ├── MalformedFrontMatter
│   ├── MissingRequiredField
│   └── InvalidFrontMatterSyntax
└── PostValidationError     - advisory lint findings on a parsed Post
    ├── UnknownLayout
    ├── EmptyTitle
    ├── UnrecognizedField
    └── UnbalancedCodeFence
"""

from typing import Iterable, Optional


class PostError(Exception):
    """Base class for every per-document failure."""

    field: Optional[str] = None
    line: Optional[int] = None


class ParseError(PostError):
    pass


class MalformedFrontMatter(ParseError):
    """Opening or closing `---` delimiter is missing."""


class MissingRequiredField(ParseError):
    def __init__(self, *fields: str):
        self.fields = tuple(fields)
        self.field = ", ".join(self.fields)
        super().__init__(f"Missing required front matter field(s): {self.field}")


class InvalidFrontMatterSyntax(ParseError):
    """A front matter line is not a valid `key: value` entry."""

    def __init__(
        self, message: str, line_number: Optional[int] = None, line_text: str = ""
    ):
        self.line = line_number
        self.line_text = line_text
        if line_number is not None:
            message = f"{message} (line {line_number}: {line_text!r})"
        super().__init__(message)


class PostValidationError(PostError):
    pass


class UnknownLayout(PostValidationError):
    field = "layout"

    def __init__(self, layout: str, allowed: Iterable[str]):
        self.layout = layout
        self.allowed = tuple(sorted(allowed))
        super().__init__(
            f"Unknown layout {layout!r}; expected one of: {', '.join(self.allowed)}"
        )


class EmptyTitle(PostValidationError):
    field = "title"

    def __init__(self):
        super().__init__("Title is empty")


class UnrecognizedField(PostValidationError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Unrecognized front matter field {field!r}")


class UnbalancedCodeFence(PostValidationError):
    def __init__(self, line_number: int, fence: str):
        self.line = line_number
        self.fence = fence
        super().__init__(
            f"Code fence {fence!r} opened on body line {line_number} is never closed"
        )
