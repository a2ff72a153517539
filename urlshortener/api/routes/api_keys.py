"""API key management endpoints.

None of these routes require authentication.
"""

import logging

from fastapi import APIRouter, Depends

from urlshortener.services import ApiKeyService
from urlshortener.api.deps import get_api_key_service
from urlshortener.api.helpers import guarantee_500_response
from urlshortener.api.schemas import (
    ApiKeyCreatedResponse,
    ApiKeyInfo,
    CreateApiKeyRequest,
    MessageResponse,
    UpdateApiKeyRequest,
)


logger = logging.getLogger(__name__)
router = APIRouter(prefix='/api/keys', tags=['api-keys'])


@router.post('', response_model=ApiKeyCreatedResponse)
@guarantee_500_response('Error generating API key')
def create_api_key(
    body: CreateApiKeyRequest | None = None,
    service: ApiKeyService = Depends(get_api_key_service),
):
    body = body or CreateApiKeyRequest()
    api_key = service.create(user_id=body.user_id, description=body.description)
    return ApiKeyCreatedResponse.from_model(api_key)


@router.get('/{user_id}', response_model=list[ApiKeyInfo])
@guarantee_500_response('Error retrieving API keys')
def list_api_keys(
    user_id: str,
    service: ApiKeyService = Depends(get_api_key_service),
):
    return [ApiKeyInfo.from_model(k) for k in service.list_user_keys(user_id)]


@router.delete('/{api_key}', response_model=MessageResponse)
@guarantee_500_response('Error revoking API key')
def revoke_api_key(
    api_key: str,
    service: ApiKeyService = Depends(get_api_key_service),
):
    service.revoke(api_key)
    return MessageResponse(message='API key revoked successfully')


@router.patch('/{api_key}', response_model=ApiKeyInfo)
@guarantee_500_response('Error updating API key')
def update_api_key(
    api_key: str,
    body: UpdateApiKeyRequest | None = None,
    service: ApiKeyService = Depends(get_api_key_service),
):
    description = body.description if body is not None else None
    return ApiKeyInfo.from_model(service.update_description(api_key, description))
