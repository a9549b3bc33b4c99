"""Models for test state and results returned when polling a test."""

from typing import Literal, TypeAlias

from pydantic import Field

from gtmetrix_client.models.base import Model

# States are treated as opaque strings, these are the ones GTmetrix documents.
TestState: TypeAlias = Literal["queued", "started", "completed", "error"]

TERMINAL_STATES: frozenset[TestState] = frozenset(["completed", "error"])


class TestMetrics(Model):
    """Performance measurements of a completed test.

    Times are in milliseconds and sizes in bytes.
    """

    __test__ = False

    report_url: str = ""
    pagespeed_score: int = 0
    yslow_score: int = 0
    html_bytes: int = 0
    html_load_time: int = 0
    page_bytes: int = 0
    page_load_time: int = 0
    page_elements: int = 0
    redirect_duration: int = 0
    connect_duration: int = 0
    backend_duration: int = 0
    first_paint_time: int = 0
    first_contentful_paint_time: int = 0
    dom_interactive_time: int = 0
    dom_content_loaded_time: int = 0
    dom_content_loaded_duration: int = 0
    onload_time: int = 0
    onload_duration: int = 0
    fully_loaded_time: int = 0
    rum_speed_index: int = 0


class TestResources(Model):
    """URLs of the artifacts generated for a completed test."""

    __test__ = False

    screenshot: str = ""
    har: str = ""
    pagespeed: str = ""
    pagespeed_files: str = ""
    yslow: str = ""
    report_pdf: str = ""
    report_pdf_full: str = ""
    video: str = ""
    filmstrip: str = ""


class ResultSnapshot(Model):
    """Point-in-time view of a test.

    ``results`` and ``resources`` only hold meaningful values once the test
    is completed.
    """

    state: str = Field(default="", description="Test state, e.g. 'queued'")
    error: str = Field(default="", description="Error reported by the API")
    results: TestMetrics = Field(default_factory=TestMetrics)
    resources: TestResources = Field(default_factory=TestResources)

    @property
    def is_terminal(self) -> bool:
        """Whether no further state transitions will happen."""
        return self.state in TERMINAL_STATES

    @property
    def is_completed(self) -> bool:
        """Whether the test finished successfully."""
        return self.state == "completed"
