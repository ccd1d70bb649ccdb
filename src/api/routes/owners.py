from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_owner_use_cases
from src.api.schemas.api_response import ApiResponse, success_result
from src.api.schemas.property_schemas import OwnerRequest, OwnerResponse, UpdateOwnerRequest
from src.application.use_cases.manage_owners import OwnerInput, OwnerUseCases, UpdateOwnerInput
from src.domain.entities.property import Owner
from src.domain.exceptions import OwnerNotFoundError

router = APIRouter(prefix="/api/owners", tags=["owners"])


def owner_to_response(owner: Owner) -> OwnerResponse:
    return OwnerResponse(
        id_owner=owner.id_owner,
        name=owner.name,
        address=owner.address,
        photo=owner.photo,
        birthday=owner.birthday,
        created_at=owner.created_at,
        updated_at=owner.updated_at,
    )


@router.get("", response_model=ApiResponse[list[OwnerResponse]])
async def list_owners(
    owners: OwnerUseCases = Depends(get_owner_use_cases),
) -> ApiResponse:  # type: ignore[type-arg]
    result = await owners.list_all()
    return success_result([owner_to_response(o) for o in result], "Owners retrieved successfully")


@router.get("/{owner_id}", response_model=ApiResponse[OwnerResponse])
async def get_owner(
    owner_id: str,
    owners: OwnerUseCases = Depends(get_owner_use_cases),
) -> ApiResponse:  # type: ignore[type-arg]
    owner = await owners.get(owner_id)
    return success_result(owner_to_response(owner), "Owner retrieved successfully")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[OwnerResponse])
async def create_owner(
    body: OwnerRequest,
    owners: OwnerUseCases = Depends(get_owner_use_cases),
) -> ApiResponse:  # type: ignore[type-arg]
    owner = await owners.create(OwnerInput(**body.model_dump()))
    return success_result(owner_to_response(owner), "Owner created successfully")


@router.put("/{owner_id}", response_model=ApiResponse[OwnerResponse])
async def replace_owner(
    owner_id: str,
    body: OwnerRequest,
    owners: OwnerUseCases = Depends(get_owner_use_cases),
) -> ApiResponse:  # type: ignore[type-arg]
    owner = await owners.replace(owner_id, OwnerInput(**body.model_dump()))
    return success_result(owner_to_response(owner), "Owner updated successfully")


@router.patch("/{owner_id}", response_model=ApiResponse[OwnerResponse])
async def update_owner(
    owner_id: str,
    body: UpdateOwnerRequest,
    owners: OwnerUseCases = Depends(get_owner_use_cases),
) -> ApiResponse:  # type: ignore[type-arg]
    owner = await owners.update(UpdateOwnerInput(owner_id=owner_id, **body.model_dump(exclude_unset=True)))
    return success_result(owner_to_response(owner), "Owner updated successfully")


@router.delete("/{owner_id}", response_model=ApiResponse[None])
async def delete_owner(
    owner_id: str,
    owners: OwnerUseCases = Depends(get_owner_use_cases),
) -> ApiResponse:  # type: ignore[type-arg]
    if not await owners.delete(owner_id):
        raise OwnerNotFoundError(owner_id)
    return success_result(message="Owner deleted successfully")
