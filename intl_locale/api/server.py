"""intl_locale HTTP API (FastAPI).

Endpoints:
- GET  /healthz                -> liveness plus locale data version
- GET  /locales/available      -> available locales and the default locale
- POST /locales/validate       -> structural validity per tag
- POST /locales/canonicalize   -> canonical, deduplicated locale list
- POST /locales/resolve        -> resolved locale, data locale, extension values
- POST /locales/supported      -> requested tags the available locales can serve
- POST /locales/prioritize     -> available locales ordered by the request list

The embedding layer installs the routes once with ``register_locale_routes``;
``create_app`` does that for a standalone app.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from intl_locale.config import settings
from intl_locale.data.provider import LocaleDataProvider, get_provider
from intl_locale.logging import create_logger
from intl_locale.negotiation import (
    prioritize_available_locales,
    resolve_locale,
    supported_locales,
)
from intl_locale.tags import (
    LocaleDataError,
    TagCanonicalizer,
    ValidationError,
    canonicalize_locale_list,
    is_structurally_valid,
)

logger = logging.getLogger(__name__)

LocalesField = Union[None, str, List[str]]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ValidateReq(_CamelModel):
    tags: List[str] = Field(default_factory=list, description="Tags to check")


class TagValidity(_CamelModel):
    tag: str
    valid: bool


class ValidateResp(_CamelModel):
    results: List[TagValidity]


class CanonicalizeReq(_CamelModel):
    locales: LocalesField = Field(default=None, description="Tag or tags in preference order")


class LocaleListResp(_CamelModel):
    locales: List[str]


class ResolveReq(_CamelModel):
    locales: LocalesField = Field(default=None, description="Requested tags in preference order")
    locale_matcher: str = Field(default_factory=lambda: settings.locale_matcher, alias="localeMatcher")
    relevant_extension_keys: List[str] = Field(default_factory=list, alias="relevantExtensionKeys")
    options: Dict[str, str] = Field(default_factory=dict, description="Per-key overrides")
    default_locale: Optional[str] = Field(default=None, alias="defaultLocale")


class ResolveResp(_CamelModel):
    locale: str
    data_locale: str = Field(alias="dataLocale")
    extensions: Dict[str, str]


class SupportedReq(_CamelModel):
    locales: LocalesField = None
    locale_matcher: str = Field(default_factory=lambda: settings.locale_matcher, alias="localeMatcher")


class AvailableResp(_CamelModel):
    locales: List[str]
    default_locale: str = Field(alias="defaultLocale")
    version: str


def register_locale_routes(
    app: FastAPI,
    provider: Optional[LocaleDataProvider] = None,
    prefix: str = "/locales",
) -> None:
    """Install the locale routes and error handlers on ``app``.

    Args:
        app: Application to extend
        provider: Locale data to serve (defaults to the global provider)
        prefix: Route prefix for the locale endpoints
    """
    data = provider or get_provider()
    canonicalizer = TagCanonicalizer(data.tables, cache_size=settings.canonical_cache_size)
    slog = create_logger("api")
    router = APIRouter(prefix=prefix)

    @router.get("/available", response_model=AvailableResp, response_model_by_alias=True)
    def available() -> Dict[str, Any]:
        return {
            "locales": sorted(data.available_locales),
            "defaultLocale": data.default_locale,
            "version": data.version,
        }

    @router.post("/validate", response_model=ValidateResp)
    def validate(req: ValidateReq) -> Dict[str, Any]:
        return {
            "results": [{"tag": tag, "valid": is_structurally_valid(tag)} for tag in req.tags]
        }

    @router.post("/canonicalize", response_model=LocaleListResp)
    def canonicalize(req: CanonicalizeReq) -> Dict[str, Any]:
        return {"locales": canonicalize_locale_list(req.locales, canonicalizer)}

    @router.post("/resolve", response_model=ResolveResp, response_model_by_alias=True)
    def resolve(req: ResolveReq) -> Dict[str, Any]:
        requested = canonicalize_locale_list(req.locales, canonicalizer)
        options: Dict[str, Any] = {**req.options, "localeMatcher": req.locale_matcher}
        result = resolve_locale(
            data.available_locales,
            requested,
            options,
            req.relevant_extension_keys,
            data,
            default_locale=req.default_locale or data.default_locale,
        )
        slog.info(
            "Resolved locale",
            requested=requested,
            matcher=req.locale_matcher,
            locale=result.locale,
        )
        return result.to_dict()

    @router.post("/supported", response_model=LocaleListResp)
    def supported(req: SupportedReq) -> Dict[str, Any]:
        requested = canonicalize_locale_list(req.locales, canonicalizer)
        return {
            "locales": supported_locales(
                data.available_locales, requested, {"localeMatcher": req.locale_matcher}
            )
        }

    @router.post("/prioritize", response_model=LocaleListResp)
    def prioritize(req: CanonicalizeReq) -> Dict[str, Any]:
        requested = canonicalize_locale_list(req.locales, canonicalizer)
        return {"locales": prioritize_available_locales(data.available_locales, requested)}

    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        slog.warning("Rejected language tag", path=request.url.path, tag=str(exc.tag))
        return JSONResponse(status_code=400, content={"detail": str(exc), "tag": str(exc.tag)})

    async def locale_data_error_handler(request: Request, exc: LocaleDataError) -> JSONResponse:
        logger.error("Locale data error on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(status_code=500, content={"detail": "Locale data error"})

    app.add_exception_handler(ValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(LocaleDataError, locale_data_error_handler)  # type: ignore[arg-type]
    app.include_router(router)


def create_app(provider: Optional[LocaleDataProvider] = None) -> FastAPI:
    """Build a standalone app serving the locale routes."""
    data = provider or get_provider()
    application = FastAPI(title="intl_locale API", version="0.1.0")

    @application.get("/healthz")
    def healthz() -> Dict[str, str]:
        return {"status": "ok", "version": data.version}

    register_locale_routes(application, data)
    return application


app = create_app()


def main() -> None:
    import uvicorn

    uvicorn.run("intl_locale.api.server:app", host="127.0.0.1", port=settings.api_port, reload=False)


if __name__ == "__main__":
    main()
