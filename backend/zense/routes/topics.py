"""Topic routes. No ownership: any authenticated caller may write."""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from zense.config import settings
from zense.dependencies import get_current_user_id, get_topic_service
from zense.schemas.topic import TopicCreateRequest, TopicResponse, TopicUpdateRequest
from zense.services.topic_service import TopicService

# Writes still pass AuthMiddleware; the dependency makes the requirement explicit
router = APIRouter(prefix=f"{settings.api_prefix}/topics", tags=["Topics"])


@router.post(
    "",
    response_model=TopicResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_user_id)],
)
async def create_topic(
    payload: TopicCreateRequest,
    topics: TopicService = Depends(get_topic_service),
):
    return await topics.create(payload)


@router.get("", response_model=List[TopicResponse], response_model_exclude_none=True)
async def list_topics(topics: TopicService = Depends(get_topic_service)):
    return await topics.find_all()


@router.get("/{topic_id}", response_model=TopicResponse, response_model_exclude_none=True)
async def get_topic(topic_id: int, topics: TopicService = Depends(get_topic_service)):
    return await topics.find_by_id(topic_id)


@router.put(
    "/{topic_id}",
    response_model=TopicResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(get_current_user_id)],
)
async def update_topic(
    topic_id: int,
    payload: TopicUpdateRequest,
    topics: TopicService = Depends(get_topic_service),
):
    return await topics.update(topic_id, payload)


@router.delete(
    "/{topic_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(get_current_user_id)],
)
async def delete_topic(
    topic_id: int,
    topics: TopicService = Depends(get_topic_service),
) -> Response:
    await topics.delete(topic_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
