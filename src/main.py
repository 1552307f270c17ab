from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from fastapi import APIRouter, Body, Depends, FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Configuration
from errors import AppError, ValidationFailure
from models import Location
from schemas import (
    CreateUserRequest,
    FavoriteRequest,
    FoodItemPayload,
    GenericTranslateRequest,
    HistoryRequest,
    PreferencesPayload,
    RecommendRequest,
    SafetyRatingPayload,
    SlangTermPayload,
    SlangTermUpdate,
    TranslateRequest,
    VendorPayload,
    parse_submission,
)
from services.content import ContentService
from services.cultural import CulturalGuide
from services.cultural_data import build_reference_data
from services.food import FoodRecommender
from services.food_repository import FoodRepository
from services.geoapify import GeoapifyClient
from services.history import HistoryLog
from services.seed_data import load_seed
from services.slang_repository import SlangRepository
from services.store import InMemoryStore
from services.translation import SlangTranslator
from services.user_repository import UserRepository


def configure_logging(cfg: Configuration) -> None:
    logger.remove()
    logger.add(sys.stderr, level=cfg.log_level.upper())


@dataclass
class Services:
    store: InMemoryStore
    translator: SlangTranslator
    recommender: FoodRecommender
    guide: CulturalGuide
    users: UserRepository
    content: ContentService


def build_services(cfg: Configuration, store: Optional[InMemoryStore] = None) -> Services:
    store = store or InMemoryStore()
    translator = SlangTranslator(SlangRepository(store), max_similar=cfg.max_similar_terms)
    geocoder = GeoapifyClient(cfg) if cfg.has_geoapify() else None
    recommender = FoodRecommender(FoodRepository(store), cfg, geocoder=geocoder)
    guide = CulturalGuide(build_reference_data(), max_results=cfg.max_cultural_results)
    users = UserRepository(store, HistoryLog(store, max_entries=cfg.history_max_entries))
    content = ContentService(translator, recommender, store)
    return Services(store, translator, recommender, guide, users, content)


def envelope(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True, "data": jsonable_encoder(data)}
    if message:
        body["message"] = message
    return body


def _error(status_code: int, error: str, message: str, details: Optional[list] = None) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "error": error, "message": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def get_services(request: Request) -> Services:
    return request.app.state.services


router = APIRouter()


# --- translation -----------------------------------------------------------


@router.post("/translate/to-english")
def translate_to_english(req: TranslateRequest, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.translator.to_english(req.text, req.region, req.context))


@router.post("/translate/to-hindi")
def translate_to_hindi(req: TranslateRequest, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.translator.to_hindi(req.text, req.region))


@router.post("/translate")
def translate(req: GenericTranslateRequest, svc: Services = Depends(get_services)) -> dict:
    result = svc.translator.translate(
        req.text,
        source_language=req.source_language,
        target_language=req.target_language,
        preferred_region=req.region,
        preferred_context=req.context,
    )
    return envelope(result)


@router.get("/translate/variations/{term}")
def regional_variations(term: str, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.translator.regional_variations(term))


@router.get("/translate/search")
def search_terms(q: str = Query(..., min_length=1), svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.translator.search_similar(q))


@router.get("/translate/popular")
def popular_terms(limit: int = Query(20, ge=1, le=100), svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.translator.popular_terms(limit))


@router.get("/translate/region/{region}")
def terms_by_region(region: str, limit: int = Query(50, ge=1, le=200), svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.translator.terms_by_region(region, limit))


@router.get("/translate/stats")
def translation_stats(svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.translator.statistics())


@router.post("/translate/terms", status_code=201)
def add_term(req: SlangTermPayload, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.translator.add_term(req.to_model()), "Slang term added")


@router.get("/translate/terms/{term_id}")
def get_term(term_id: str, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.translator.get_term(term_id))


@router.put("/translate/terms/{term_id}")
def update_term(term_id: str, req: SlangTermUpdate, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.translator.update_term(term_id, req.to_updates()), "Slang term updated")


@router.delete("/translate/terms/{term_id}")
def delete_term(term_id: str, svc: Services = Depends(get_services)) -> dict:
    svc.translator.delete_term(term_id)
    return envelope(message="Slang term deleted")


# --- food ------------------------------------------------------------------


def _location(lat: float, lon: float) -> Location:
    return Location(latitude=lat, longitude=lon)


@router.post("/food/recommendations")
def food_recommendations(req: RecommendRequest, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.recommender.recommend(req.location.to_model(), req.filters.to_model()))


@router.get("/food/category/{category}")
def food_by_category(
    category: str,
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    svc: Services = Depends(get_services),
) -> dict:
    return envelope(svc.recommender.by_category(category, _location(lat, lon)))


@router.get("/food/search")
def food_search(
    q: str = Query(..., min_length=1),
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    svc: Services = Depends(get_services),
) -> dict:
    return envelope(svc.recommender.search(q, _location(lat, lon)))


@router.get("/food/hubs/{city}")
def food_hubs(city: str, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.recommender.popular_hubs(city))


@router.get("/food/stats")
def food_stats(svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.recommender.statistics())


@router.post("/food/vendors", status_code=201)
def add_vendor(req: VendorPayload, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.recommender.add_vendor(req.to_model()), "Vendor added")


@router.get("/food/vendors/{vendor_id}/safety")
def vendor_safety(vendor_id: str, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.recommender.rate_safety(vendor_id))


@router.put("/food/vendors/{vendor_id}/safety")
def update_vendor_safety(vendor_id: str, req: SafetyRatingPayload, svc: Services = Depends(get_services)) -> dict:
    vendor = svc.recommender.update_safety_rating(vendor_id, req.to_model())
    return envelope(vendor.safety_rating, "Safety rating updated")


@router.post("/food/items", status_code=201)
def add_food_item(req: FoodItemPayload, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.recommender.add_food_item(req.to_model()), "Food item added")


# --- culture ---------------------------------------------------------------


@router.get("/culture/region/{region}")
def regional_info(region: str, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.guide.regional_info(region))


@router.get("/culture/festival/{name}")
def festival(name: str, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.guide.festival(name))


@router.get("/culture/etiquette/{context}")
def etiquette(context: str, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.guide.etiquette(context))


@router.get("/culture/bargaining")
def bargaining(city: str = "", state: str = "", svc: Services = Depends(get_services)) -> dict:
    location = Location(latitude=0.0, longitude=0.0, city=city, state=state)
    return envelope(svc.guide.bargaining_tips(location))


@router.get("/culture/search")
def cultural_search(
    q: str = Query(..., min_length=1),
    region: Optional[str] = None,
    grouped: bool = False,
    svc: Services = Depends(get_services),
) -> dict:
    if grouped:
        return envelope(svc.guide.search_grouped(q, region))
    return envelope(svc.guide.search(q, region))


# --- admin -----------------------------------------------------------------


@router.post("/admin/content", status_code=201)
def submit_content(payload: Dict[str, Any] = Body(...), svc: Services = Depends(get_services)) -> dict:
    try:
        submission = parse_submission(payload)
    except ValidationError as exc:
        raise ValidationFailure(
            "Invalid content submission",
            [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()],
        ) from exc
    return envelope(svc.content.submit(submission), "Content submitted")


@router.get("/admin/content/pending")
def pending_content(svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.content.pending_cultural())


# --- users -----------------------------------------------------------------


@router.post("/users", status_code=201)
def create_user(req: CreateUserRequest, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.users.create_user(req.preferences.to_model()), "User created")


@router.get("/users/{user_id}")
def get_user(user_id: str, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.users.get_user(user_id))


@router.put("/users/{user_id}/preferences")
def update_preferences(user_id: str, req: PreferencesPayload, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.users.update_preferences(user_id, req.to_model()), "Preferences updated")


@router.post("/users/{user_id}/favorites", status_code=201)
def add_favorite(user_id: str, req: FavoriteRequest, svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.users.add_favorite(user_id, req.type, req.item_id, req.notes), "Favorite added")


@router.delete("/users/{user_id}/favorites/{favorite_id}")
def remove_favorite(user_id: str, favorite_id: str, svc: Services = Depends(get_services)) -> dict:
    svc.users.remove_favorite(user_id, favorite_id)
    return envelope(message="Favorite removed")


@router.get("/users/{user_id}/history")
def user_history(user_id: str, limit: Optional[int] = Query(None, ge=1), svc: Services = Depends(get_services)) -> dict:
    return envelope(svc.users.history(user_id, limit))


@router.post("/users/{user_id}/history", status_code=201)
def record_history(user_id: str, req: HistoryRequest, svc: Services = Depends(get_services)) -> dict:
    entry = svc.users.record_history(user_id, req.type, req.query, req.results, req.user_rating)
    return envelope(entry)


@router.get("/healthz")
def healthz(request: Request) -> dict:
    cfg: Configuration = request.app.state.cfg
    logger.info("cfg: {}", cfg.log_summary())
    return envelope({"status": "ok"})


def create_app(
    cfg: Optional[Configuration] = None,
    store: Optional[InMemoryStore] = None,
    seed: Optional[bool] = None,
) -> FastAPI:
    load_dotenv()
    cfg = cfg or Configuration.from_env()
    configure_logging(cfg)
    logger.info("starting local guide: {}", cfg.log_summary())

    services = build_services(cfg, store)
    if seed is None:
        seed = cfg.seed_on_startup
    if seed:
        load_seed(services.translator, services.recommender)

    app = FastAPI(title="Indian Local Guide")
    app.state.cfg = cfg
    app.state.services = services
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.opt(exception=exc).error("{} {} failed: {}", request.method, request.url.path, exc)
        else:
            logger.info("{} {} -> {} {}", request.method, request.url.path, exc.status_code, exc)
        return _error(exc.status_code, exc.code, exc.message, getattr(exc, "errors", None))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()]
        return _error(400, ValidationFailure.code, "Invalid request", details)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error("{} {} failed: {}", request.method, request.url.path, exc)
        return _error(500, AppError.code, "internal error")

    app.include_router(router, prefix="/api")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8010, reload=True)
