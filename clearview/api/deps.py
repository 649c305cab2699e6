"""FastAPI dependency injection."""

import threading
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from clearview.config import Settings, get_settings
from clearview.core.enums import View
from clearview.core.logging import log_access
from clearview.models.user import AccessContext
from clearview.services.auth import bearer_token, resolve_access
from clearview.services.geocoding import GeocodingClient, get_geocoder
from clearview.services.photo_id import PhotoIdentifier, SimulatedPhotoIdentifier
from clearview.services.shop import ShopState
from clearview.services.store import get_store

# Rate limiter (Nominatim allows roughly one request per second per app)
limiter = Limiter(key_func=get_remote_address)

_shop: ShopState | None = None
_shop_lock = threading.Lock()


def get_shop() -> ShopState:
    """Shared shop snapshot, subscribed to the document store."""
    global _shop
    if _shop is None:
        with _shop_lock:
            if _shop is None:
                settings = get_settings()
                _shop = ShopState(
                    get_store(),
                    default_unit_cost=settings.default_unit_cost,
                    default_job_price=settings.default_job_price,
                )
    return _shop


def get_geocoding() -> GeocodingClient:
    return get_geocoder()


def get_photo_identifier(
    settings: Annotated[Settings, Depends(get_settings)],
) -> PhotoIdentifier:
    return SimulatedPhotoIdentifier(delay=settings.photo_id_delay_seconds)


def get_access(
    shop: Annotated[ShopState, Depends(get_shop)],
    settings: Annotated[Settings, Depends(get_settings)],
    x_admin_pin: Annotated[str | None, Header()] = None,
    authorization: Annotated[str | None, Header()] = None,
) -> AccessContext:
    """Role for this request, from a verified session token or the admin PIN."""
    return resolve_access(
        shop.store,
        settings.admin_pin,
        pin=x_admin_pin,
        token=bearer_token(authorization),
    )


def require_view(view: View) -> Callable[..., AccessContext]:
    """Dependency factory: 403 unless the caller's role may open ``view``."""

    def _check(
        request: Request, access: Annotated[AccessContext, Depends(get_access)]
    ) -> AccessContext:
        allowed = access.can_view(view)
        log_access(
            access.role.value,
            view.value,
            allowed,
            request_id=getattr(request.state, "request_id", "-"),
        )
        if not allowed:
            raise HTTPException(
                status_code=403,
                detail=f"The {access.role.value} role cannot access {view.value}",
            )
        return access

    return _check
