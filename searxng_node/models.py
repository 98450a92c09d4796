from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict, Any

from searxng_node.description import (
    FORMAT_OPTIONS,
    LANGUAGE_OPTIONS,
    SAFESEARCH_OPTIONS,
    TIME_RANGE_OPTIONS,
    option_values,
)

class SearxngCredentials(BaseModel):
    api_url: str = Field(..., min_length=1, description="Base URL of the SearXNG instance")
    api_key: str = Field(default="", description="Bearer token forwarded on every request")

    @field_validator('api_url')
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip('/')

    @property
    def search_url(self) -> str:
        return f"{self.api_url}/search"

class AdditionalFields(BaseModel):
    language: Optional[str] = None
    time_range: Optional[str] = None
    safesearch: Optional[str] = None
    pageno: Optional[int] = Field(default=None, ge=1)
    format: Optional[str] = None

    @field_validator('pageno', mode='before')
    @classmethod
    def unset_zero_page(cls, v):
        # 0 means "not set", same as an empty value
        if v == 0 and not isinstance(v, bool):
            return None
        return v

    @field_validator('safesearch', mode='before')
    @classmethod
    def coerce_safesearch(cls, v):
        # Hosts may hand the level over as a number
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator('language')
    @classmethod
    def validate_language(cls, v):
        return _check_option(v, LANGUAGE_OPTIONS, 'language')

    @field_validator('time_range')
    @classmethod
    def validate_time_range(cls, v):
        return _check_option(v, TIME_RANGE_OPTIONS, 'time_range')

    @field_validator('safesearch')
    @classmethod
    def validate_safesearch(cls, v):
        return _check_option(v, SAFESEARCH_OPTIONS, 'safesearch')

    @field_validator('format')
    @classmethod
    def validate_format(cls, v):
        return _check_option(v, FORMAT_OPTIONS, 'format')

def _check_option(value: Optional[str], options: List[Dict[str, str]], field: str) -> Optional[str]:
    # Empty means "not set"; the API applies its own default
    if value is None or value == "":
        return value
    allowed = option_values(options)
    if value not in allowed:
        raise ValueError(f"{field} must be one of {allowed}, got {value!r}")
    return value

class FormattedResult(BaseModel):
    title: Any = None
    url: Any = None
    content: Any = None
    snippet: Any = None

class SearchMetadata(BaseModel):
    total: Any = None
    time: Any = None
    engine: Any = None

class SearchResponse(BaseModel):
    success: bool = True
    query: Any
    results: List[FormattedResult]
    metadata: SearchMetadata
    raw: Any = None

class SingleAnswer(BaseModel):
    success: bool = True
    query: Any
    answer: Any = None

class ErrorResult(BaseModel):
    success: bool = False
    error: str
    query: Any
