from typing import List
from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_field_service
from api.schemas import CreateFieldRequest, FieldResponse
from application.field_service import FieldService
from domain.ports import FieldNotFoundError

router = APIRouter(prefix="/tables", tags=["fields"])


@router.post("/{table_id}/fields", response_model=FieldResponse, response_model_by_alias=True)
async def create_field(table_id: str, payload: CreateFieldRequest, service: FieldService = Depends(get_field_service)):
    field = service.create(table_id, payload.name, payload.type)
    return FieldResponse.from_entity(field)


@router.get("/{table_id}/fields/{field_id}", response_model=FieldResponse, response_model_by_alias=True)
async def get_field(table_id: str, field_id: str, service: FieldService = Depends(get_field_service)):
    try:
        return FieldResponse.from_entity(service.get(table_id, field_id))
    except FieldNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{table_id}/fields/{field_id}")
async def delete_field(table_id: str, field_id: str, service: FieldService = Depends(get_field_service)):
    try:
        service.delete(table_id, field_id)
    except FieldNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {}


@router.get("/{table_id}/fields", response_model=List[FieldResponse], response_model_by_alias=True)
async def list_fields(table_id: str, service: FieldService = Depends(get_field_service)):
    return [FieldResponse.from_entity(f) for f in service.list(table_id)]
