"""
Client Router
"""
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from fatturazione.models.client import Client
from fatturazione.schemas.client_schema import ClientSchema, AllClientsResponseSchema
from fatturazione.services.interfaces.client_service_interface import IClientService
from .dependencies import get_client_service, LIMIT_DEFAULT, MAX_LIMIT

router = APIRouter(
    prefix="/api/v1/clients",
    tags=["Client"],
)


@router.get("/", status_code=status.HTTP_200_OK, response_model=AllClientsResponseSchema)
async def get_all_clients(
    client_service: IClientService = Depends(get_client_service),
    page: int = Query(1, gt=0),
    limit: int = Query(LIMIT_DEFAULT, gt=0, le=MAX_LIMIT)
):
    """
    Restituisce tutti i clienti con supporto alla paginazione.

    - **page**: La pagina da restituire, per la paginazione dei risultati.
    - **limit**: Il numero massimo di risultati per pagina.
    """
    clients, total = await client_service.get_clients(page=page, limit=limit)
    return {"clients": clients, "total": total, "page": page, "limit": limit}


@router.get("/{client_id}", status_code=status.HTTP_200_OK, response_model=Client)
async def get_client(
    client_id: UUID = Path(...),
    client_service: IClientService = Depends(get_client_service)
):
    return await client_service.get_client(client_id)


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=Client)
async def create_client(
    client_data: ClientSchema,
    client_service: IClientService = Depends(get_client_service)
):
    return await client_service.create_client(client_data)


@router.put("/{client_id}", status_code=status.HTTP_200_OK, response_model=Client)
async def update_client(
    client_data: ClientSchema,
    client_id: UUID = Path(...),
    client_service: IClientService = Depends(get_client_service)
):
    return await client_service.update_client(client_id, client_data)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: UUID = Path(...),
    client_service: IClientService = Depends(get_client_service)
):
    await client_service.delete_client(client_id)
