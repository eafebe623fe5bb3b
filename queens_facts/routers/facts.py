from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Path, Query, Request

from queens_facts.services.fact.fact_models import Fact, FactFilter
from queens_facts.services.fact.fact_query_service import FactQueryService

router = APIRouter()

US_POSTAL_CODE = r"^\d{5}(-\d{4})?$"


def _service(request: Request) -> FactQueryService:
    return FactQueryService(request.state.sb, config=request.app.state.settings)


@router.get("/facts", response_model=List[Fact], summary="List / search / randomize facts")
def get_facts(
    request: Request,
    id: Optional[int] = Query(None, description="Exact fact_id lookup, ignores every other filter"),
    neighborhood: Optional[str] = Query(None, max_length=200),
    category: Optional[str] = Query(None, max_length=200),
    zipcode: Optional[str] = Query(None, pattern=US_POSTAL_CODE),
    random: Optional[Literal["true", "false"]] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=100),
) -> List[Dict[str, Any]]:
    """
    - id            : exact lookup, 404 when absent
    - neighborhood  : fuzzy, 404 when nothing is close enough
    - category      : fuzzy, 404 when nothing is close enough
    - zipcode       : exact
    - random=true   : random pick from the filtered set (1 row unless limit)
    """
    service = _service(request)

    if id is not None:
        return service.get_by_id(id)

    return service.find(
        FactFilter(
            neighborhood=neighborhood,
            category=category,
            zipcode=zipcode,
            random=random == "true",
            limit=limit,
        )
    )


@router.get("/facts/{fact_id}", response_model=List[Fact], summary="Get facts by id")
def get_fact_by_id(request: Request, fact_id: int = Path(...)) -> List[Dict[str, Any]]:
    return _service(request).get_by_id(fact_id)


@router.get("/all", response_model=List[Fact], summary="Full table dump")
def get_all_facts(request: Request) -> List[Dict[str, Any]]:
    return _service(request).list_all()
