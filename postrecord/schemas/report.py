import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, computed_field

from postrecord.errors import PostError
from postrecord.schemas.post import Post

Severity = Literal["error", "warning"]


class PostIssue(BaseModel):
    code: str
    severity: Severity
    message: str
    field: Optional[str] = None
    line: Optional[int] = None

    @classmethod
    def from_error(cls, error: PostError, severity: Severity) -> "PostIssue":
        return cls(
            code=type(error).__name__,
            severity=severity,
            message=str(error),
            field=error.field,
            line=error.line,
        )


class PostReport(BaseModel):
    path: str
    slug: str
    published_date: Optional[datetime.date] = None
    post: Optional[Post] = None
    issues: List[PostIssue] = Field(default_factory=list)

    @property
    def errors(self) -> List[PostIssue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> List[PostIssue]:
        return [i for i in self.issues if i.severity == "warning"]

    @property
    def ok(self) -> bool:
        return self.post is not None and not self.errors


class BatchReport(BaseModel):
    """Per-file results of one ingestion run."""

    reports: List[PostReport] = Field(default_factory=list)

    @computed_field
    @property
    def files_checked(self) -> int:
        return len(self.reports)

    @computed_field
    @property
    def error_count(self) -> int:
        return sum(len(r.errors) for r in self.reports)

    @computed_field
    @property
    def warning_count(self) -> int:
        return sum(len(r.warnings) for r in self.reports)

    @computed_field
    @property
    def files_with_errors(self) -> int:
        return sum(1 for r in self.reports if r.errors)

    @computed_field
    @property
    def files_with_warnings(self) -> int:
        return sum(1 for r in self.reports if r.warnings and not r.errors)

    @computed_field
    @property
    def is_healthy(self) -> bool:
        return self.error_count == 0

    @property
    def posts(self) -> List[PostReport]:
        return [r for r in self.reports if r.post is not None]
