"""Turn an arbitrary (possibly malformed) JSON value into a :class:`ModularDocument`."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from app.models.document import ModularDocument

logger = logging.getLogger(__name__)

# Top-level keys that must be records, and the one that must be a list.
_RECORD_FIELDS = ("seo_meta", "conversion_plan", "author", "featured_image")
_LIST_FIELDS = ("blocks",)


def _log_discarded_fields(raw: Mapping) -> None:
    """Log top-level fields, under either key spelling, that will be dropped."""
    checks = [(name, Mapping, "an object") for name in _RECORD_FIELDS]
    checks += [(name, list, "an array") for name in _LIST_FIELDS]
    for name, expected, description in checks:
        for key in dict.fromkeys((name, to_camel(name))):
            value = raw.get(key)
            if value is not None and not isinstance(value, expected):
                logger.debug("Discarding %s: expected %s, got %s", key, description, type(value).__name__)


def parse_document(raw: Any) -> ModularDocument:
    """Coerce *raw* into a :class:`ModularDocument`.

    Never raises: a field of the wrong shape is treated as absent, and input
    that is not an object at all yields an empty document.
    """
    if not isinstance(raw, Mapping):
        logger.debug("Document payload is %s, not an object; using an empty document", type(raw).__name__)
        return ModularDocument()

    _log_discarded_fields(raw)
    try:
        return ModularDocument.model_validate(dict(raw))
    except ValidationError as exc:
        logger.warning("Document failed lenient validation (%d errors); using an empty document", exc.error_count())
        return ModularDocument()
