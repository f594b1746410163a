"""API router for the authenticated user's contacts."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from ....application.services.contact_service import ContactService
from ....core.dependencies import get_contact_service
from ....domain.models import User
from ..dependencies import require_identity, resolve_request_context
from ..schemas.contact_schemas import ContactResponse
from ..schemas.web_schemas import Paging, WebResponse

router = APIRouter(
    prefix="/api/contacts",
    tags=["contacts"],
    dependencies=[Depends(resolve_request_context)],
)


@router.post("", response_model=WebResponse[ContactResponse], response_model_exclude_none=True)
def create_contact(
    payload: Any = Body(default=None),
    user: User = Depends(require_identity),
    service: ContactService = Depends(get_contact_service),
) -> WebResponse[ContactResponse]:
    contact = service.create(user, payload)
    return WebResponse(data=ContactResponse.from_contact(contact))


@router.get("", response_model=WebResponse[List[ContactResponse]], response_model_exclude_none=True)
def search_contacts(
    name: Optional[str] = Query(default=None),
    email: Optional[str] = Query(default=None),
    phone: Optional[str] = Query(default=None),
    page: Optional[str] = Query(default=None),
    size: Optional[str] = Query(default=None),
    user: User = Depends(require_identity),
    service: ContactService = Depends(get_contact_service),
) -> WebResponse[List[ContactResponse]]:
    params: Dict[str, Any] = {"name": name, "email": email, "phone": phone}
    if page is not None:
        params["page"] = page
    if size is not None:
        params["size"] = size
    result = service.search(user, params)
    return WebResponse(
        data=[ContactResponse.from_contact(contact) for contact in result.items],
        paging=Paging(
            current_page=result.current_page,
            size=result.size,
            total_page=result.total_page,
        ),
    )


@router.get("/{contact_id}", response_model=WebResponse[ContactResponse], response_model_exclude_none=True)
def get_contact(
    contact_id: int,
    user: User = Depends(require_identity),
    service: ContactService = Depends(get_contact_service),
) -> WebResponse[ContactResponse]:
    return WebResponse(data=ContactResponse.from_contact(service.get(user, contact_id)))


@router.put("/{contact_id}", response_model=WebResponse[ContactResponse], response_model_exclude_none=True)
def update_contact(
    contact_id: int,
    payload: Any = Body(default=None),
    user: User = Depends(require_identity),
    service: ContactService = Depends(get_contact_service),
) -> WebResponse[ContactResponse]:
    body = dict(payload) if isinstance(payload, dict) else {}
    body["id"] = contact_id
    contact = service.update(user, body)
    return WebResponse(data=ContactResponse.from_contact(contact))


@router.delete("/{contact_id}", response_model=WebResponse[bool], response_model_exclude_none=True)
def remove_contact(
    contact_id: int,
    user: User = Depends(require_identity),
    service: ContactService = Depends(get_contact_service),
) -> WebResponse[bool]:
    service.remove(user, contact_id)
    return WebResponse(data=True)
