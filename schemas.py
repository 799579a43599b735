from pydantic import BaseModel, Field
from typing import Optional, List, Union

class LookupQuery(BaseModel):
    zip: str = Field(..., description="5-digit ZIP, echoed verbatim")
    focus: Optional[str] = Field(default=None, description="Free-text focus used only for ranking")

class Taxonomy(BaseModel):
    code: str
    desc: Optional[str] = None

class NormalizedProvider(BaseModel):
    npi: Optional[Union[int, str]] = Field(default=None, description="NPI number as returned by the registry")
    name: str
    credential: Optional[str] = None
    gender: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    phone: Optional[str] = None
    taxonomies: List[Taxonomy]

class ScoredProvider(NormalizedProvider):
    score: int = 0

class LookupResponse(BaseModel):
    query: LookupQuery
    count: int
    results: List[ScoredProvider]

class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
