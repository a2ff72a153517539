"""Service health endpoint.

Reports each record store's reachability. Responds with 503 when any store
can't be read, so load balancers can take the instance out of rotation.
"""

from fastapi import APIRouter, Request, Response

from urlshortener.constants import StoreName
from urlshortener.api.schemas import HealthResponse


router = APIRouter(tags=['system'])


@router.get('/health', response_model=HealthResponse)
def health(request: Request, response: Response):
    state = request.app.state
    stores = {
        StoreName.API_KEYS.value: state.api_key_service.store.ping(),
        StoreName.URLS.value: state.short_url_service.store.ping(),
    }
    healthy = all(stores.values())
    if not healthy:
        response.status_code = 503

    return HealthResponse(
        status='healthy' if healthy else 'unhealthy',
        backend=state.config['store']['backend'],
        stores=stores,
    )
