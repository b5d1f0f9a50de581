"""Registration submission endpoints"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from typing import Any, Dict
import logging

from app.config import Settings, get_settings
from app.models.submission import SubmissionErrorResponse, SubmissionResponse
from app.services.field_mapping import build_properties
from app.services.notion_service import NotionClient, NotionError, get_notion_client

logger = logging.getLogger(__name__)
router = APIRouter()

SUCCESS_MESSAGE = "Registration successfully submitted to Notion!"
FAILURE_MESSAGE = "Failed to submit to Notion."


async def read_submission(request: Request) -> Dict[str, Any]:
    """
    Read the form payload from the request body

    Anything other than a JSON object sent as application/json (empty body,
    other content types, malformed JSON, arrays) is treated as an empty
    submission.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type != "application/json" and not content_type.endswith("+json"):
        return {}

    try:
        body = await request.json()
    except ValueError:
        logger.info("Submission body is not valid JSON, using defaults")
        return {}
    if not isinstance(body, dict):
        logger.info(f"Submission body is a {type(body).__name__}, using defaults")
        return {}
    return body


@router.post(
    "/submit-to-notion",
    response_model=SubmissionResponse,
    responses={500: {"model": SubmissionErrorResponse}}
)
async def submit_to_notion(
    submission: Dict[str, Any] = Depends(read_submission),
    settings: Settings = Depends(get_settings),
    notion: NotionClient = Depends(get_notion_client)
):
    """Create one row in the registrations database (PUBLIC endpoint)"""
    properties = build_properties(submission)

    try:
        page = await notion.create_page(settings.notion_database_id, properties)
    except NotionError as e:
        logger.error(f"Error submitting to Notion: {e.body or e}")
        return _failure(e.message)
    except Exception as e:
        logger.error(f"Error submitting to Notion: {e}")
        return _failure(str(e))

    logger.info(f"Created Notion page {page.get('id')}")
    return SubmissionResponse(message=SUCCESS_MESSAGE, data=page)


def _failure(error: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=SubmissionErrorResponse(message=FAILURE_MESSAGE, error=error).model_dump()
    )
