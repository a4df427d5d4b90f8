from datetime import date
from functools import lru_cache
import logging
from pathlib import Path
import sys
from typing import Literal

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Ensure local src package is importable in serverless runtime.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from mixologist.cache import BaseCache, MongoCache  # noqa: E402
from mixologist.config import MixologistConfig  # noqa: E402
from mixologist.context import get_season  # noqa: E402
from mixologist.core import (  # noqa: E402
    MISSING_API_KEY,
    generate_comment,
    search,
    search_image,
    upgrade_cocktail,
)
from mixologist.exceptions import ConfigError, ImageError, RateLimitError  # noqa: E402
from mixologist.schema import EnhancedComment, SearchResponse, UpgradeResult  # noqa: E402

app = FastAPI(title="mixologist API", version="1.0.0")
logger = logging.getLogger(__name__)
CONFIG = MixologistConfig.from_env()

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(CONFIG.frontend_origins),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


class SearchRequest(BaseModel):
    query: str | None = None
    image: str | None = None


class CommentRequest(BaseModel):
    title: str
    ingredients: list[str] = Field(default_factory=list)
    season: str | None = None
    recipeType: Literal["classic", "elevate"] = "classic"


class UpgradeRequest(BaseModel):
    originalQuery: str
    upgradeType: Literal["seasonal", "spicy", "premium", "festive"] = "seasonal"


def _api_key() -> str:
    api_key = MixologistConfig.from_env().gemini_api_key
    if not api_key:
        raise HTTPException(status_code=500, detail=MISSING_API_KEY)
    return api_key


@lru_cache(maxsize=1)
def _get_cache() -> BaseCache | None:
    if not CONFIG.mongodb_uri:
        return None
    return MongoCache(
        CONFIG.mongodb_uri,
        CONFIG.mongodb_database,
        CONFIG.mongodb_collection,
        ttl_seconds=CONFIG.cache_ttl_seconds,
    )


def _validate_image_size(image_base64: str) -> None:
    payload = image_base64.partition(",")[2] if image_base64.startswith("data:") else image_base64
    if len(payload.strip()) * 3 // 4 > CONFIG.max_image_bytes:
        raise HTTPException(status_code=413, detail="image too large")


async def _run_search(query: str) -> SearchResponse:
    if not query.strip():
        raise HTTPException(status_code=400, detail='Query parameter "q" is required.')
    api_key = _api_key()
    try:
        return await search(query, api_key, _get_cache())
    except ConfigError as exc:
        raise HTTPException(status_code=500, detail=MISSING_API_KEY) from exc
    except RateLimitError as exc:
        raise HTTPException(status_code=429, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("search failed")
        raise HTTPException(status_code=500, detail="internal_error") from exc


@app.get("/search", response_model=SearchResponse)
async def search_get(q: str = Query(default="")) -> SearchResponse:
    return await _run_search(q)


@app.post("/search")
async def search_post(body: SearchRequest) -> dict:
    if body.image is not None:
        if not body.image.strip():
            raise HTTPException(status_code=400, detail="Image data is required.")
        _validate_image_size(body.image)
        api_key = _api_key()
        try:
            result = await search_image(body.image, api_key)
        except ImageError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except ConfigError as exc:
            raise HTTPException(status_code=500, detail=MISSING_API_KEY) from exc
        except Exception as exc:
            logger.exception("image search failed")
            raise HTTPException(status_code=500, detail="internal_error") from exc
        return result.model_dump(by_alias=True, mode="json")

    response = await _run_search(body.query or "")
    return response.model_dump(by_alias=True, mode="json")


@app.post("/comment", response_model=EnhancedComment)
async def comment(body: CommentRequest) -> EnhancedComment:
    api_key = _api_key()
    season = body.season or get_season(date.today().month)
    try:
        return await generate_comment(body.title, body.ingredients, season, api_key, body.recipeType)
    except ConfigError as exc:
        raise HTTPException(status_code=500, detail=MISSING_API_KEY) from exc
    except Exception as exc:
        logger.exception("comment failed")
        raise HTTPException(status_code=500, detail="internal_error") from exc


@app.post("/upgrade", response_model=UpgradeResult)
async def upgrade(body: UpgradeRequest) -> UpgradeResult:
    api_key = _api_key()
    if not body.originalQuery.strip():
        raise HTTPException(status_code=400, detail="originalQuery is required")
    try:
        return await upgrade_cocktail(body.originalQuery.strip(), body.upgradeType, api_key)
    except ConfigError as exc:
        raise HTTPException(status_code=500, detail=MISSING_API_KEY) from exc
    except Exception as exc:
        logger.exception("upgrade failed")
        raise HTTPException(status_code=500, detail="internal_error") from exc
