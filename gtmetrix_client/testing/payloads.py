"""Payload helpers for GTmetrix API responses in tests."""

from typing import Any


def submit_response(
    *,
    test_id: str = "abc123XY",
    credits_left: int = 68,
    error: str | None = None,
) -> dict[str, Any]:
    """Create a test submission response payload.

    This is the response from POST /test.
    """
    if error is not None:
        return {"error": error, "credits_left": credits_left}

    return {
        "test_id": test_id,
        "poll_state_url": f"https://gtmetrix.com/api/0.1/test/{test_id}",
        "credits_left": credits_left,
    }


def state_response(
    *,
    state: str = "completed",
    test_id: str = "abc123XY",
    error: str = "",
) -> dict[str, Any]:
    """Create a test state payload.

    Returns a realistic GET /test/{test_id} response. Results and resources
    are only filled in for completed tests, as the API does.
    """
    payload: dict[str, Any] = {
        "state": state,
        "error": error,
        "results": {},
        "resources": {},
    }
    if state != "completed":
        return payload

    payload["results"] = {
        "report_url": f"https://gtmetrix.com/reports/example.com/{test_id}",
        "pagespeed_score": 95,
        "yslow_score": 84,
        "html_bytes": 12040,
        "html_load_time": 187,
        "page_bytes": 3245998,
        "page_load_time": 2315,
        "page_elements": 61,
        "redirect_duration": 0,
        "connect_duration": 23,
        "backend_duration": 151,
        "first_paint_time": 574,
        "first_contentful_paint_time": 574,
        "dom_interactive_time": 1204,
        "dom_content_loaded_time": 1230,
        "dom_content_loaded_duration": 11,
        "onload_time": 2302,
        "onload_duration": 9,
        "fully_loaded_time": 2315,
        "rum_speed_index": 1062,
    }
    base = f"https://gtmetrix.com/api/0.1/test/{test_id}"
    payload["resources"] = {
        "screenshot": f"{base}/screenshot",
        "har": f"{base}/har",
        "pagespeed": f"{base}/pagespeed",
        "pagespeed_files": f"{base}/pagespeed-files",
        "yslow": f"{base}/yslow",
        "report_pdf": f"{base}/report-pdf",
        "report_pdf_full": f"{base}/report-pdf?full=1",
        "video": f"{base}/video",
        "filmstrip": f"{base}/filmstrip",
    }
    return payload
