from decimal import Decimal

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_hydrate_property_use_case,
    get_property_repo,
    get_query_properties_use_case,
)
from src.api.routes.owners import owner_to_response
from src.api.schemas.api_response import ApiResponse, success_result
from src.api.schemas.property_schemas import (
    CreatePropertyRequest,
    CreatePropertyTraceRequest,
    PagedPropertiesResponse,
    PropertyImageRequest,
    PropertyImageResponse,
    PropertyResponse,
    PropertyStatusRequest,
    PropertyTraceResponse,
    UpdatePropertyRequest,
)
from src.application.interfaces.property_repository import PropertyRepository
from src.application.use_cases.hydrate_property import HydrateProperty, HydratePropertyInput
from src.application.use_cases.property_gallery import (
    AddPropertyImage,
    AddPropertyImageInput,
    AddPropertyTrace,
    AddPropertyTraceInput,
    DeletePropertyImage,
    GetPropertyImages,
    GetPropertyTraces,
    ReplacePropertyImage,
    ReplacePropertyImageInput,
)
from src.application.use_cases.property_mutations import (
    CreateProperty,
    CreatePropertyInput,
    DeleteProperty,
    SetPropertyStatus,
    UpdateProperty,
    UpdatePropertyInput,
)
from src.application.use_cases.query_properties import QueryProperties
from src.config import settings
from src.domain.entities.paged_list import PagedList
from src.domain.entities.property import Property, PropertyImage, PropertyTrace
from src.domain.exceptions import PropertyImageNotFoundError, PropertyNotFoundError
from src.domain.query.property_query import PropertyQueryParameters

router = APIRouter(prefix="/api/properties", tags=["properties"])


def _image_to_response(image: PropertyImage) -> PropertyImageResponse:
    return PropertyImageResponse(
        id_property_image=image.id_property_image,
        id_property=image.id_property,
        file=image.file,
        enabled=image.enabled,
        created_at=image.created_at,
    )


def _trace_to_response(trace: PropertyTrace) -> PropertyTraceResponse:
    return PropertyTraceResponse(
        id_property_trace=trace.id_property_trace,
        id_property=trace.id_property,
        date_sale=trace.date_sale,
        name=trace.name,
        value=trace.value,
        tax=trace.tax,
        created_at=trace.created_at,
    )


def _property_to_response(prop: Property) -> PropertyResponse:
    return PropertyResponse(
        id_property=prop.id_property,
        id_owner=prop.id_owner,
        name=prop.name,
        address=prop.address,
        price=prop.price,
        code_internal=prop.code_internal,
        year=prop.year,
        enabled=prop.enabled,
        created_at=prop.created_at,
        updated_at=prop.updated_at,
        main_image=prop.main_image,
        owner=owner_to_response(prop.owner) if prop.owner is not None else None,
        images=[_image_to_response(i) for i in prop.images] if prop.images is not None else None,
        traces=[_trace_to_response(t) for t in prop.traces] if prop.traces is not None else None,
    )


def _page_to_response(page: PagedList[Property]) -> PagedPropertiesResponse:
    return PagedPropertiesResponse(
        items=[_property_to_response(p) for p in page.items],
        current_page=page.current_page,
        page_size=page.page_size,
        total_count=page.total_count,
        total_pages=page.total_pages,
        has_previous=page.has_previous,
        has_next=page.has_next,
    )


@router.get("", response_model=ApiResponse[PagedPropertiesResponse])
async def list_properties(
    name: str | None = Query(default=None),
    address: str | None = Query(default=None),
    min_price: Decimal | None = Query(default=None, ge=0),
    max_price: Decimal | None = Query(default=None, ge=0),
    year: int | None = Query(default=None),
    code_internal: str | None = Query(default=None),
    id_owner: str | None = Query(default=None),
    enabled: bool | None = Query(default=True),
    sort_by: str | None = Query(default=None),
    sort_descending: bool = Query(default=False),
    page_number: int = Query(default=1, ge=1),
    page_size: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    include_owner: bool = Query(default=False),
    include_traces: bool = Query(default=False),
    use_case: QueryProperties = Depends(get_query_properties_use_case),
) -> ApiResponse:  # type: ignore[type-arg]
    """List properties with optional filtering, sorting and paging."""
    page = await use_case.execute(
        PropertyQueryParameters(
            name=name,
            address=address,
            min_price=min_price,
            max_price=max_price,
            year=year,
            code_internal=code_internal,
            id_owner=id_owner,
            enabled=enabled,
            sort_by=sort_by,
            sort_descending=sort_descending,
            page_number=page_number,
            page_size=page_size,
            include_owner=include_owner,
            # Images are always loaded so every row carries its thumbnail
            include_images=True,
            include_traces=include_traces,
        )
    )
    return success_result(_page_to_response(page), "Properties retrieved successfully")


@router.get("/filter", response_model=ApiResponse[PagedPropertiesResponse])
async def filter_properties(
    name: str | None = Query(default=None),
    address: str | None = Query(default=None),
    min_price: Decimal | None = Query(default=None, ge=0),
    max_price: Decimal | None = Query(default=None, ge=0),
    page_number: int = Query(default=1, ge=1),
    page_size: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    use_case: QueryProperties = Depends(get_query_properties_use_case),
) -> ApiResponse:  # type: ignore[type-arg]
    """Public search: only enabled properties, newest first."""
    page = await use_case.execute(
        PropertyQueryParameters(
            name=name,
            address=address,
            min_price=min_price,
            max_price=max_price,
            enabled=True,
            page_number=page_number,
            page_size=page_size,
            include_images=True,
        )
    )
    return success_result(_page_to_response(page), "Properties retrieved successfully")


@router.get("/{property_id}", response_model=ApiResponse[PropertyResponse])
async def get_property(
    property_id: str,
    include_owner: bool = Query(default=True),
    include_images: bool = Query(default=True),
    include_traces: bool = Query(default=True),
    use_case: HydrateProperty = Depends(get_hydrate_property_use_case),
) -> ApiResponse:  # type: ignore[type-arg]
    prop = await use_case.execute(
        HydratePropertyInput(
            property_id=property_id,
            include_owner=include_owner,
            include_images=include_images,
            include_traces=include_traces,
        )
    )
    return success_result(_property_to_response(prop), "Property retrieved successfully")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[PropertyResponse])
async def create_property(
    body: CreatePropertyRequest,
    repo: PropertyRepository = Depends(get_property_repo),
) -> ApiResponse:  # type: ignore[type-arg]
    prop = await CreateProperty(repo).execute(CreatePropertyInput(**body.model_dump()))
    return success_result(_property_to_response(prop), "Property created successfully")


@router.put("/{property_id}", response_model=ApiResponse[PropertyResponse])
async def update_property(
    property_id: str,
    body: UpdatePropertyRequest,
    repo: PropertyRepository = Depends(get_property_repo),
) -> ApiResponse:  # type: ignore[type-arg]
    """Partial update: only the fields present in the body are written."""
    prop = await UpdateProperty(repo).execute(
        UpdatePropertyInput(property_id=property_id, **body.model_dump(exclude_unset=True))
    )
    return success_result(_property_to_response(prop), "Property updated successfully")


@router.patch("/{property_id}/status", response_model=ApiResponse[PropertyResponse])
async def update_property_status(
    property_id: str,
    body: PropertyStatusRequest,
    repo: PropertyRepository = Depends(get_property_repo),
) -> ApiResponse:  # type: ignore[type-arg]
    prop = await SetPropertyStatus(repo).execute(property_id, body.enabled)
    label = "enabled" if body.enabled else "disabled"
    return success_result(_property_to_response(prop), f"Property {label} successfully")


@router.delete("/{property_id}", response_model=ApiResponse[None])
async def delete_property(
    property_id: str,
    repo: PropertyRepository = Depends(get_property_repo),
) -> ApiResponse:  # type: ignore[type-arg]
    if not await DeleteProperty(repo).execute(property_id):
        raise PropertyNotFoundError(property_id)
    return success_result(message="Property deleted successfully")


# ---- Gallery ---------------------------------------------------------------

@router.get("/{property_id}/images", response_model=ApiResponse[list[PropertyImageResponse]])
async def list_property_images(
    property_id: str,
    repo: PropertyRepository = Depends(get_property_repo),
) -> ApiResponse:  # type: ignore[type-arg]
    images = await GetPropertyImages(repo).execute(property_id)
    return success_result([_image_to_response(i) for i in images], "Property images retrieved successfully")


@router.post(
    "/{property_id}/images",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[PropertyImageResponse],
)
async def add_property_image(
    property_id: str,
    body: PropertyImageRequest,
    repo: PropertyRepository = Depends(get_property_repo),
) -> ApiResponse:  # type: ignore[type-arg]
    image = await AddPropertyImage(repo).execute(
        AddPropertyImageInput(property_id=property_id, file=str(body.file), enabled=body.enabled)
    )
    return success_result(_image_to_response(image), "Property image added successfully")


@router.put("/{property_id}/images/{image_id}", response_model=ApiResponse[PropertyImageResponse])
async def replace_property_image(
    property_id: str,
    image_id: str,
    body: PropertyImageRequest,
    repo: PropertyRepository = Depends(get_property_repo),
) -> ApiResponse:  # type: ignore[type-arg]
    image = await ReplacePropertyImage(repo).execute(
        ReplacePropertyImageInput(
            property_id=property_id,
            image_id=image_id,
            file=str(body.file),
            enabled=body.enabled,
        )
    )
    return success_result(_image_to_response(image), "Property image updated successfully")


@router.delete("/{property_id}/images/{image_id}", response_model=ApiResponse[None])
async def delete_property_image(
    property_id: str,
    image_id: str,
    repo: PropertyRepository = Depends(get_property_repo),
) -> ApiResponse:  # type: ignore[type-arg]
    if not await DeletePropertyImage(repo).execute(property_id, image_id):
        raise PropertyImageNotFoundError(image_id)
    return success_result(message="Property image deleted successfully")


# ---- Sale ledger -----------------------------------------------------------

@router.get("/{property_id}/traces", response_model=ApiResponse[list[PropertyTraceResponse]])
async def list_property_traces(
    property_id: str,
    repo: PropertyRepository = Depends(get_property_repo),
) -> ApiResponse:  # type: ignore[type-arg]
    traces = await GetPropertyTraces(repo).execute(property_id)
    return success_result([_trace_to_response(t) for t in traces], "Property traces retrieved successfully")


@router.post(
    "/{property_id}/traces",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[PropertyTraceResponse],
)
async def add_property_trace(
    property_id: str,
    body: CreatePropertyTraceRequest,
    repo: PropertyRepository = Depends(get_property_repo),
) -> ApiResponse:  # type: ignore[type-arg]
    trace = await AddPropertyTrace(repo).execute(
        AddPropertyTraceInput(property_id=property_id, **body.model_dump())
    )
    return success_result(_trace_to_response(trace), "Property trace added successfully")
