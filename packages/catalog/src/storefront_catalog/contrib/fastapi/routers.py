"""Routers for ``/api/products`` and ``/api/enquiries``.

Handlers only translate HTTP to service calls; response envelopes keep the
storefront admin's established shapes.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from storefront_core.domain.record import Record
from storefront_filtering import collect_params

from ...executor import PageResult
from ...services import EnquiryService, ProductService
from .dependencies import get_enquiries, get_products


def _record(record: Record) -> dict[str, Any]:
    return record.model_dump(mode="json", by_alias=True)


def _page(key: str, result: PageResult) -> dict[str, Any]:
    return {
        key: jsonable_encoder(result.items),
        "pagination": result.meta.to_dict(),
    }


def _query(request: Request) -> dict[str, Any]:
    return collect_params(request.query_params.multi_items())


def build_products_router() -> APIRouter:
    router = APIRouter(prefix="/api/products", tags=["products"])

    @router.get("")
    async def list_products(
        request: Request, service: ProductService = Depends(get_products)  # noqa: B008
    ) -> dict[str, Any]:
        return _page("products", await service.list(_query(request)))

    @router.get("/stats/overview")
    async def product_stats(
        service: ProductService = Depends(get_products),  # noqa: B008
    ) -> dict[str, Any]:
        return jsonable_encoder((await service.stats()).to_dict())

    @router.get("/{product_id}")
    async def get_product(
        product_id: str, service: ProductService = Depends(get_products)  # noqa: B008
    ) -> dict[str, Any]:
        return _record(await service.get(product_id))

    @router.post("", status_code=201)
    async def create_product(
        body: dict[str, Any] = Body(...),  # noqa: B008
        service: ProductService = Depends(get_products),  # noqa: B008
    ) -> dict[str, Any]:
        product = await service.create(body)
        return {"message": "Product created successfully", "product": _record(product)}

    @router.put("/{product_id}")
    async def update_product(
        product_id: str,
        body: dict[str, Any] = Body(...),  # noqa: B008
        service: ProductService = Depends(get_products),  # noqa: B008
    ) -> dict[str, Any]:
        product = await service.update(product_id, body)
        return {"message": "Product updated successfully", "product": _record(product)}

    @router.delete("/{product_id}")
    async def delete_product(
        product_id: str, service: ProductService = Depends(get_products)  # noqa: B008
    ) -> dict[str, Any]:
        product = await service.delete(product_id)
        return {"message": "Product deleted successfully", "product": _record(product)}

    @router.put("/{product_id}/stock")
    async def update_stock(
        product_id: str,
        body: dict[str, Any] = Body(...),  # noqa: B008
        service: ProductService = Depends(get_products),  # noqa: B008
    ) -> dict[str, Any]:
        product, status = await service.update_stock(product_id, body.get("stock"))
        return {
            "message": "Stock updated successfully",
            "product": _record(product),
            "stockStatus": status.value,
        }

    @router.post("/{product_id}/rating")
    async def add_rating(
        product_id: str,
        body: dict[str, Any] = Body(...),  # noqa: B008
        service: ProductService = Depends(get_products),  # noqa: B008
    ) -> dict[str, Any]:
        product = await service.add_rating(product_id, body.get("rating"))
        return {"message": "Rating added successfully", "product": _record(product)}

    return router


def build_enquiries_router() -> APIRouter:
    router = APIRouter(prefix="/api/enquiries", tags=["enquiries"])

    @router.get("")
    async def list_enquiries(
        request: Request, service: EnquiryService = Depends(get_enquiries)  # noqa: B008
    ) -> dict[str, Any]:
        return _page("enquiries", await service.list(_query(request)))

    @router.get("/stats/overview")
    async def enquiry_stats(
        service: EnquiryService = Depends(get_enquiries),  # noqa: B008
    ) -> dict[str, Any]:
        return jsonable_encoder((await service.stats()).to_dict())

    @router.get("/pending/list")
    async def pending_enquiries(
        service: EnquiryService = Depends(get_enquiries),  # noqa: B008
    ) -> dict[str, Any]:
        enquiries = await service.pending()
        return {
            "message": "Pending enquiries fetched successfully",
            "enquiries": jsonable_encoder(enquiries),
            "count": len(enquiries),
        }

    @router.get("/priority/{priority}")
    async def enquiries_by_priority(
        priority: str, service: EnquiryService = Depends(get_enquiries)  # noqa: B008
    ) -> dict[str, Any]:
        enquiries = await service.by_priority(priority)
        return {
            "message": f"{priority} priority enquiries fetched successfully",
            "enquiries": jsonable_encoder(enquiries),
            "count": len(enquiries),
        }

    @router.get("/search/{term}")
    async def search_enquiries(
        term: str,
        limit: str = "10",
        service: EnquiryService = Depends(get_enquiries),  # noqa: B008
    ) -> dict[str, Any]:
        enquiries = await service.search_term(term, limit)
        return {
            "message": "Search completed successfully",
            "enquiries": jsonable_encoder(enquiries),
            "count": len(enquiries),
            "searchTerm": term,
        }

    @router.get("/export/csv")
    async def export_enquiries(
        request: Request, service: EnquiryService = Depends(get_enquiries)  # noqa: B008
    ) -> Response:
        return Response(
            content=await service.export_csv(_query(request)),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=enquiries.csv"},
        )

    @router.put("/bulk/status")
    async def bulk_update_status(
        body: dict[str, Any] = Body(...),  # noqa: B008
        service: EnquiryService = Depends(get_enquiries),  # noqa: B008
    ) -> dict[str, Any]:
        ids = body.get("enquiryIds")
        result = await service.bulk_update_status(
            ids if isinstance(ids, list) else [], body.get("status"), body.get("notes")
        )
        return {
            "message": f"{result.modified} enquiries updated successfully",
            "modifiedCount": result.modified,
            "matchedCount": result.matched,
        }

    @router.get("/{enquiry_id}")
    async def get_enquiry(
        enquiry_id: str, service: EnquiryService = Depends(get_enquiries)  # noqa: B008
    ) -> dict[str, Any]:
        return _record(await service.get(enquiry_id))

    @router.post("", status_code=201)
    async def create_enquiry(
        body: dict[str, Any] = Body(...),  # noqa: B008
        service: EnquiryService = Depends(get_enquiries),  # noqa: B008
    ) -> dict[str, Any]:
        enquiry = await service.create(body)
        return {"message": "Enquiry created successfully", "enquiry": _record(enquiry)}

    @router.put("/{enquiry_id}")
    async def update_enquiry(
        enquiry_id: str,
        body: dict[str, Any] = Body(...),  # noqa: B008
        service: EnquiryService = Depends(get_enquiries),  # noqa: B008
    ) -> dict[str, Any]:
        enquiry = await service.update(enquiry_id, body)
        return {"message": "Enquiry updated successfully", "enquiry": _record(enquiry)}

    @router.delete("/{enquiry_id}")
    async def delete_enquiry(
        enquiry_id: str, service: EnquiryService = Depends(get_enquiries)  # noqa: B008
    ) -> dict[str, Any]:
        enquiry = await service.delete(enquiry_id)
        return {"message": "Enquiry deleted successfully", "enquiry": _record(enquiry)}

    @router.put("/{enquiry_id}/status")
    async def update_status(
        enquiry_id: str,
        body: dict[str, Any] = Body(...),  # noqa: B008
        service: EnquiryService = Depends(get_enquiries),  # noqa: B008
    ) -> dict[str, Any]:
        enquiry = await service.update_status(
            enquiry_id, body.get("status"), body.get("notes")
        )
        return {"message": "Status updated successfully", "enquiry": _record(enquiry)}

    @router.put("/{enquiry_id}/priority")
    async def update_priority(
        enquiry_id: str,
        body: dict[str, Any] = Body(...),  # noqa: B008
        service: EnquiryService = Depends(get_enquiries),  # noqa: B008
    ) -> dict[str, Any]:
        enquiry = await service.update_priority(enquiry_id, body.get("priority"))
        return {"message": "Priority updated successfully", "enquiry": _record(enquiry)}

    @router.post("/{enquiry_id}/complete")
    async def complete_enquiry(
        enquiry_id: str,
        body: dict[str, Any] | None = Body(None),  # noqa: B008
        service: EnquiryService = Depends(get_enquiries),  # noqa: B008
    ) -> dict[str, Any]:
        enquiry = await service.complete(enquiry_id, (body or {}).get("notes"))
        return {"message": "Enquiry marked as completed", "enquiry": _record(enquiry)}

    return router
