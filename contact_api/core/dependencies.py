from fastapi import Depends, Request

from .container import ApplicationContainer


def get_container(request: Request) -> ApplicationContainer:
    container = getattr(request.app.state, "container", None)
    if not container:
        raise RuntimeError("Application container not initialised.")
    return container


def get_persistence_gateway(container: ApplicationContainer = Depends(get_container)):
    return container.persistence


def get_user_service(container: ApplicationContainer = Depends(get_container)):
    return container.user_service


def get_contact_service(container: ApplicationContainer = Depends(get_container)):
    return container.contact_service
