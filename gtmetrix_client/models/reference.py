"""Model for the response to a test submission."""

from pydantic import Field

from gtmetrix_client.models.base import Model


class TestReference(Model):
    """Handle for a queued test, used to poll for its results."""

    __test__ = False

    test_id: str = Field(default="", description="Test ID assigned by GTmetrix")
    poll_state_url: str = Field(default="", description="URL to poll for state")
    credits_left: int = Field(default=0, description="API credits remaining")
    error: str = Field(default="", description="Error reported by the API")
