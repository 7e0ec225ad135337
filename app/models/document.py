"""Typed model of a modular document as produced by the content pipeline.

Every field is optional and every field is lenient: a value of the wrong shape
is replaced by its type's empty value instead of failing validation.  The
``BeforeValidator`` coercers below are what make
:func:`app.services.coercion.parse_document` total.
"""

import math
from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Coercers
# ---------------------------------------------------------------------------

def coerce_str(value: Any) -> str:
    """Return *value* if it is a string, otherwise ``""``.

    Code points that cannot be encoded as UTF-8 (lone surrogates) become ``?``.
    """
    if not isinstance(value, str):
        return ""
    return value.encode("utf-8", "replace").decode("utf-8")


def coerce_str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [coerce_str(item) for item in value]


def coerce_rows(value: Any) -> List[List[str]]:
    """Table rows: a ragged list of string lists; a non-list row becomes ``[]``."""
    if not isinstance(value, list):
        return []
    return [coerce_str_list(row) for row in value]


def coerce_record(value: Any) -> Any:
    """Pass through mappings and already-built models; anything else is absent."""
    if isinstance(value, BaseModel):
        return value
    return dict(value) if isinstance(value, Mapping) else None


def coerce_record_list(value: Any) -> List[Any]:
    """A list of records; elements that are not mappings become empty records."""
    if not isinstance(value, list):
        return []
    records = (coerce_record(item) for item in value)
    return [{} if record is None else record for record in records]


# Levels outside this magnitude clamp to the same heading depth anyway
_LEVEL_BOUND = 2**31


def coerce_level(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        return None
    return max(-_LEVEL_BOUND, min(_LEVEL_BOUND, value))


def coerce_flag(value: Any) -> bool:
    return value is True


def coerce_dimension(value: Any) -> Optional[float]:
    """Positive finite numbers only; ``0``, negatives, booleans, strings and
    integers too large for a float are absent."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) and number > 0 else None


SafeStr = Annotated[str, BeforeValidator(coerce_str)]
SafeStrList = Annotated[List[str], BeforeValidator(coerce_str_list)]
SafeRows = Annotated[List[List[str]], BeforeValidator(coerce_rows)]
SafeLevel = Annotated[Optional[int], BeforeValidator(coerce_level)]
SafeFlag = Annotated[bool, BeforeValidator(coerce_flag)]
SafeDimension = Annotated[Optional[float], BeforeValidator(coerce_dimension)]


class LenientModel(BaseModel):
    """Frozen base model accepting both snake_case and camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


# ---------------------------------------------------------------------------
# Document parts
# ---------------------------------------------------------------------------

class SeoMeta(LenientModel):
    h1: SafeStr = ""
    meta_title: SafeStr = ""
    meta_description: SafeStr = ""
    slug: SafeStr = ""
    primary_keyword: SafeStr = ""


class ConversionPlan(LenientModel):
    primary_intent: SafeStr = ""
    cta_strategy: SafeStrList = []


class ImageMetadata(LenientModel):
    """Display metadata for an uploaded image.  Only ``signed_url`` is required to show it."""

    object_key: SafeStr = ""
    mime_type: SafeStr = ""
    width: SafeDimension = None
    height: SafeDimension = None
    byte_size: SafeDimension = None
    sha256: SafeStr = ""
    signed_url: SafeStr = ""
    title_text: SafeStr = ""
    template_version: SafeStr = ""
    source: SafeStr = ""
    style_variant_id: SafeStr = ""


class SocialUrls(LenientModel):
    linkedin: SafeStr = ""
    x: SafeStr = ""


class BasicInfo(LenientModel):
    title: SafeStr = ""
    location: SafeStr = ""


class Author(LenientModel):
    id: SafeStr = ""
    name: SafeStr = ""
    bio: SafeStr = ""
    social_urls: Annotated[Optional[SocialUrls], BeforeValidator(coerce_record)] = None
    basic_info: Annotated[Optional[BasicInfo], BeforeValidator(coerce_record)] = None
    profile_image: Annotated[Optional[ImageMetadata], BeforeValidator(coerce_record)] = None


class BlockLink(LenientModel):
    href: SafeStr = ""
    anchor: SafeStr = ""
    label: SafeStr = ""

    @property
    def display_text(self) -> str:
        return self.anchor or self.label or self.href


class FaqItem(LenientModel):
    question: SafeStr = ""
    answer: SafeStr = ""


class CallToAction(LenientModel):
    label: SafeStr = ""
    href: SafeStr = ""


class BlockType(str, Enum):
    HERO = "hero"
    SUMMARY = "summary"
    SECTION = "section"
    LIST = "list"
    STEPS = "steps"
    COMPARISON_TABLE = "comparison_table"
    FAQ = "faq"
    CTA = "cta"
    CONCLUSION = "conclusion"
    SOURCES = "sources"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: str) -> "BlockType":
        """Map a raw ``block_type`` tag to a member, ``UNKNOWN`` when unrecognised."""
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN


class DocumentBlock(LenientModel):
    """One structural unit of a document.

    ``block_type`` keeps the raw tag as received; use :attr:`kind` to dispatch.
    """

    block_type: SafeStr = ""
    heading: SafeStr = ""
    body: SafeStr = ""
    level: SafeLevel = None
    items: SafeStrList = []
    ordered: SafeFlag = False
    table_columns: SafeStrList = []
    table_rows: SafeRows = []
    faq_items: Annotated[List[FaqItem], BeforeValidator(coerce_record_list)] = []
    cta: Annotated[Optional[CallToAction], BeforeValidator(coerce_record)] = None
    links: Annotated[List[BlockLink], BeforeValidator(coerce_record_list)] = []

    @property
    def kind(self) -> BlockType:
        return BlockType.from_tag(self.block_type)


class ModularDocument(LenientModel):
    seo_meta: Annotated[Optional[SeoMeta], BeforeValidator(coerce_record)] = None
    conversion_plan: Annotated[Optional[ConversionPlan], BeforeValidator(coerce_record)] = None
    author: Annotated[Optional[Author], BeforeValidator(coerce_record)] = None
    featured_image: Annotated[Optional[ImageMetadata], BeforeValidator(coerce_record)] = None
    blocks: Annotated[List[DocumentBlock], BeforeValidator(coerce_record_list)] = []
