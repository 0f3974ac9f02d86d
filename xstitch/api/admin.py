from typing import Optional

from fastapi import APIRouter

from ..core.store import store as pattern_store
from ..models.api_schemas import PatternListResponse

router = APIRouter()


@router.get("/patterns", response_model=PatternListResponse)
async def list_patterns(query: Optional[str] = None):
    records = pattern_store.list(query=query)
    return {"items": [r.to_dict(include_result=False) for r in records], "total": len(records)}
