from __future__ import annotations

import logging
import re
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from config import settings
from errors import InvalidInput, UpstreamError
from schemas import LookupQuery, LookupResponse, NormalizedProvider, ScoredProvider, Taxonomy
from specialities import is_mental_health

logger = logging.getLogger(__name__)

ZIP5_RE = re.compile(r"[0-9]{5}")

# --------------------
# HTTP client
# --------------------

def _client() -> httpx.AsyncClient:
    timeout = httpx.Timeout(
        timeout=settings.HTTP_READ_TIMEOUT,
        connect=settings.HTTP_CONNECT_TIMEOUT,
        read=settings.HTTP_READ_TIMEOUT,
        write=settings.HTTP_WRITE_TIMEOUT,
        pool=settings.HTTP_POOL_TIMEOUT,
    )
    return httpx.AsyncClient(timeout=timeout)

async def get_npi_client() -> AsyncIterator[httpx.AsyncClient]:
    """One registry client per request, closed when the request is done."""
    async with _client() as client:
        yield client

# --------------------
# Query assembly
# --------------------

def validate_zip(zip_code: Optional[str]) -> str:
    if not zip_code or not ZIP5_RE.fullmatch(zip_code):
        raise InvalidInput()
    return zip_code

def _base_params() -> Dict[str, str]:
    return {
        "version": settings.NPI_API_VERSION,
        "country_code": settings.NPI_COUNTRY_CODE,
        "enumeration_type": settings.NPI_ENUMERATION_TYPE,
        "limit": str(settings.NPI_RESULT_LIMIT),
    }

async def query_by_zip(zip_code: str, client: httpx.AsyncClient) -> Dict[str, Any]:
    """Run one registry search for individual providers in ``zip_code``.

    Raises ``UpstreamError`` when the request fails in transport or the
    registry answers with a non-2xx status. No retries.
    """
    params = _base_params() | {"postal_code": zip_code}
    logger.info("[NPI] GET %s postal_code=%s", settings.NPI_BASE_URL, zip_code)

    try:
        r = await client.get(settings.NPI_BASE_URL, params=params)
    except httpx.RequestError as exc:
        raise UpstreamError(f"NPI API request failed: {exc}") from exc

    if not r.is_success:
        raise UpstreamError(f"NPI API error: {r.status_code}")

    data = r.json()
    if isinstance(data, dict) and data.get("Errors"):
        logger.warning("[NPI] Registry reported errors: %s", data["Errors"])
    return data

# --------------------
# Cleaning
# --------------------

def _practice_address(addresses: List[Dict[str, Any]]) -> Dict[str, Any]:
    for a in addresses:
        if a.get("address_purpose") == "LOCATION":
            return a
    return addresses[0] if addresses else {}

def _name_from_basic(basic: Dict[str, Any]) -> str:
    if basic.get("name"):
        return basic["name"]
    return " ".join(p for p in [basic.get("first_name"), basic.get("last_name")] if p)

def _or_none(value: Any) -> Optional[str]:
    return str(value) if value else None

def normalize_provider(entry: Dict[str, Any]) -> Optional[NormalizedProvider]:
    """Map one raw registry record to a provider, or None if it has no mental-health taxonomy."""
    basic = entry.get("basic") or {}
    addresses = entry.get("addresses") or []
    taxonomies = entry.get("taxonomies") or []

    mh_taxonomies = [
        Taxonomy(code=t["code"], desc=t.get("desc"))
        for t in taxonomies
        if is_mental_health(t.get("code"))
    ]
    if not mh_taxonomies:
        return None

    practice = _practice_address(addresses)

    return NormalizedProvider(
        npi=entry.get("number"),
        name=_name_from_basic(basic),
        credential=_or_none(basic.get("credential")),
        gender=_or_none(basic.get("gender")),
        city=_or_none(practice.get("city")),
        state=_or_none(practice.get("state")),
        postal_code=_or_none(practice.get("postal_code")),
        phone=_or_none(practice.get("telephone_number")),
        taxonomies=mh_taxonomies,
    )

def clean_results(raw: Dict[str, Any]) -> List[NormalizedProvider]:
    results = raw.get("results") or []
    cleaned: List[NormalizedProvider] = []
    for e in results:
        provider = normalize_provider(e)
        if provider is not None:
            cleaned.append(provider)

    logger.info(
        "[CLEAN] raw=%d kept=%d dropped=%d",
        len(results), len(cleaned), len(results) - len(cleaned),
    )
    return cleaned

# --------------------
# Scoring
# --------------------

def score_provider(provider: NormalizedProvider, focus: Optional[str]) -> int:
    focus_lower = (focus or "").lower()
    if not focus_lower:
        return 0

    combined = " ".join((t.desc or "").lower() for t in provider.taxonomies)
    score = 0
    if "addiction" in combined and "addiction" in focus_lower:
        score += 2
    if "family" in combined and "marriage" in focus_lower:
        score += 2
    # Applies to any non-empty focus, not only one mentioning "mental health".
    if "mental health" in combined:
        score += 1
    return score

def rank_providers(providers: List[NormalizedProvider], focus: Optional[str]) -> List[ScoredProvider]:
    scored = [
        ScoredProvider(**p.model_dump(), score=score_provider(p, focus))
        for p in providers
    ]
    # sorted() is stable, so equal scores keep registry order
    return sorted(scored, key=lambda p: p.score, reverse=True)

# --------------------
# Pipeline
# --------------------

async def lookup_therapists(
    zip_code: str,
    focus: Optional[str],
    client: httpx.AsyncClient,
) -> LookupResponse:
    raw = await query_by_zip(zip_code, client=client)
    ranked = rank_providers(clean_results(raw), focus)
    logger.info("[LOOKUP] zip=%s focus=%r results=%d", zip_code, focus, len(ranked))
    return LookupResponse(
        query=LookupQuery(zip=zip_code, focus=focus or None),
        count=len(ranked),
        results=ranked,
    )
