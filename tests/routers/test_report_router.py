from fastapi import FastAPI
from fastapi.testclient import TestClient

from postrecord import dependencies as deps
from postrecord.routers import report
from postrecord.schemas.report import BatchReport, PostIssue, PostReport
from tests.conftest import FakePostsService


def make_app(fake_service):
    app = FastAPI()
    app.dependency_overrides[deps.get_posts_service] = lambda: fake_service
    app.include_router(report.router)
    return app


def test_report_serializes_counts_and_issues():
    batch = BatchReport(
        reports=[
            PostReport(
                path="_posts/2023-01-02-bad.md",
                slug="bad",
                issues=[
                    PostIssue(
                        code="MalformedFrontMatter",
                        severity="error",
                        message="missing delimiter",
                    )
                ],
            )
        ]
    )
    client = TestClient(make_app(FakePostsService(report=batch)))

    res = client.get("/report")

    assert res.status_code == 200
    body = res.json()
    assert body["files_checked"] == 1
    assert body["error_count"] == 1
    assert body["is_healthy"] is False
    assert body["reports"][0]["issues"][0]["code"] == "MalformedFrontMatter"
    assert body["reports"][0]["post"] is None


def test_report_returns_500_on_unexpected_error():
    class BoomService(FakePostsService):
        def build_report(self):
            raise RuntimeError("boom")

    client = TestClient(make_app(BoomService()))

    res = client.get("/report")

    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to build report"
