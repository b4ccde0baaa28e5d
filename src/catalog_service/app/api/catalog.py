from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from ..core.dependencies import get_auth_service, get_catalog_service, get_current_admin
from ..schemas import (
    AdminUserOut,
    ItemCreate,
    ItemCreatedResponse,
    ItemDetailResponse,
    ItemKeywordsResponse,
    ItemListResponse,
    ItemUpdate,
    ItemUpdatedResponse,
    KeywordCreate,
    KeywordListResponse,
    KeywordRef,
    KeywordSearchRequest,
    KeywordsCreatedResponse,
    KeywordsLinkedResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PageRequest,
)
from ..services.auth import AuthService
from ..services.catalog import CatalogService, parse_keyword_ids
from ..services.domain import AuthenticatedAdmin

router = APIRouter()


@router.post("/admin/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Exchange admin credentials for a bearer token.
    """
    result = await auth_service.authenticate(credentials.email, credentials.password)

    if result is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    return LoginResponse(
        message="Login successful",
        token=result.token,
        user=AdminUserOut(
            id=result.admin_id,
            email=result.email,
            name=result.name,
            role=result.role,
            last_login=result.last_login,
        ),
    )


@router.post("/items", response_model=ItemListResponse)
async def list_items(
    paging: PageRequest | None = None,
    admin: AuthenticatedAdmin = Depends(get_current_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    paging = paging or PageRequest()
    logger.info(f"Listing items page={paging.page}, page_size={paging.page_size}")

    items = await catalog.list_items(paging.page, paging.page_size)

    return ItemListResponse(
        message="Success" if items else "No data found",
        page=paging.page,
        page_size=paging.page_size,
        data=items,
    )


@router.get("/item/get/{item_id}", response_model=ItemDetailResponse)
async def get_item(
    item_id: int,
    admin: AuthenticatedAdmin = Depends(get_current_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """
    Get an item together with its keywords and image attachments.
    """
    detail = await catalog.get_item_detail(item_id)

    if detail is None:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")

    return ItemDetailResponse(message="Success", data=detail)


@router.post("/item/add", response_model=ItemCreatedResponse)
async def add_item(
    payload: ItemCreate,
    admin: AuthenticatedAdmin = Depends(get_current_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    item = await catalog.add_item(payload.model_dump(exclude_unset=True))

    return ItemCreatedResponse(message="Success", inserted_id=item.item_id)


@router.patch("/item/update/{item_id}", response_model=ItemUpdatedResponse)
async def update_item(
    item_id: int,
    payload: ItemUpdate,
    admin: AuthenticatedAdmin = Depends(get_current_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """
    Update the given item fields. Only fields present in the body are written.
    """
    values = payload.model_dump(exclude_unset=True)
    if not values:
        raise HTTPException(
            status_code=400, detail="No valid fields provided for update"
        )

    affected = await catalog.update_item(item_id, values)

    if affected == 0:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")

    return ItemUpdatedResponse(message="Success", affected_rows=affected)


@router.delete("/item/delete/{item_id}", response_model=MessageResponse)
async def delete_item(
    item_id: int,
    admin: AuthenticatedAdmin = Depends(get_current_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    deleted = await catalog.delete_item(item_id)

    if deleted == 0:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")

    return MessageResponse(message="Item deleted successfully")


@router.post("/keyword/add", response_model=KeywordsCreatedResponse)
async def add_keywords(
    keywords: list[KeywordCreate],
    admin: AuthenticatedAdmin = Depends(get_current_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    if not keywords:
        raise HTTPException(status_code=400, detail="Invalid data format or empty data")

    inserted = await catalog.add_keywords([k.keyword_name for k in keywords])

    return KeywordsCreatedResponse(
        message="Keywords added successfully", inserted_rows=inserted
    )


@router.post("/keywords", response_model=KeywordListResponse)
async def search_keywords(
    search: KeywordSearchRequest | None = None,
    admin: AuthenticatedAdmin = Depends(get_current_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    search = search or KeywordSearchRequest()
    keywords = await catalog.search_keywords(
        search.keyword_name, search.page, search.page_size
    )

    return KeywordListResponse(
        message="Success" if keywords else "No data found", data=keywords
    )


@router.get("/item/keywords/{item_id}", response_model=ItemKeywordsResponse)
async def get_item_keywords(
    item_id: int,
    admin: AuthenticatedAdmin = Depends(get_current_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    item_keywords = await catalog.get_item_keywords(item_id)

    if item_keywords is None:
        raise HTTPException(
            status_code=404, detail="No keyword found for the given item."
        )

    return ItemKeywordsResponse(message="Success", data=item_keywords)


@router.post("/item/keywords/{item_id}", response_model=KeywordsLinkedResponse)
async def link_item_keywords(
    item_id: int,
    keywords: list[KeywordRef],
    admin: AuthenticatedAdmin = Depends(get_current_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """
    Link existing keywords to an item. Pairs that are already linked are kept
    as they are.
    """
    if not keywords:
        raise HTTPException(status_code=400, detail="Invalid or empty keywords array.")

    keyword_ids = parse_keyword_ids(k.keyword_id for k in keywords)
    if not keyword_ids:
        raise HTTPException(status_code=400, detail="No valid keyword IDs provided.")

    linked = await catalog.link_keywords(item_id, keyword_ids)

    if linked is None:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")

    return KeywordsLinkedResponse(
        message="Keywords successfully linked to item", linked_keywords=linked
    )
