"""
Built-in schemas for the storefront feature modules.

Each feature module (contact form, product listing, navigation, responsive
layout) accepts an optional configuration override and validates it against
one of these schemas before use. Property names are the configuration keys
those modules read, so they keep their camelCase spelling.
"""

from types import MappingProxyType
from typing import List, Mapping

from ..validators.base import Schema, create_schema
from ..validators.rules import (
    array_of,
    boolean,
    compose,
    conditional,
    custom,
    enum,
    number,
    shape,
    string,
    union,
)

PRODUCT_SORTS = ("name-asc", "name-desc", "price-asc", "price-desc", "rating-desc")
PRODUCT_FILTERS = ("category", "price", "availability")

CONTACT_FORM_SCHEMA = create_schema(
    {
        "formId": string(required=True),
        "nameInputId": string(required=True),
        "emailInputId": string(required=True),
        "phoneInputId": string(),
        "subjectInputId": string(required=True),
        "messageTextareaId": string(required=True),
        "submitButtonId": string(required=True),
        "errorMessageClass": string(default="error-message"),
        "successMessageId": string(),
        "apiEndpoint": string(required=True, min_length=1),
        "validation": shape(
            {
                "enableRealtime": boolean(),
                "showErrorMessages": boolean(),
                "scrollOnError": boolean(),
            }
        ),
        "accessibility": shape(
            {
                "enableAria": boolean(),
                "enableLiveRegion": boolean(),
                "errorSummaryId": string(),
            }
        ),
    },
    name="contact_form",
)

PRODUCT_LISTING_SCHEMA = create_schema(
    {
        "animationDuration": number(min=0, max=2000, default=300),
        "mobileBreakpoint": number(min=320, max=2560, default=768),
        "productsPerPage": number(min=1, max=100, default=12),
        "maxProductsPerRow": number(min=1, max=6, default=4),
        "debounceDelay": number(min=16, max=1000, default=250),
        "throttleDelay": number(min=16, max=1000, default=100),
        "enableLazyLoading": boolean(),
        "enableFiltering": boolean(),
        "enableSorting": boolean(),
        "enableSearch": boolean(),
        "enablePagination": boolean(),
        "imageLoadingStrategy": enum("lazy", "eager", default="lazy"),
        "filterDebounceDelay": number(min=0, max=2000, default=300),
        "searchDebounceDelay": conditional(
            lambda config: config.get("enableSearch", True) is not False,
            number(min=0, max=2000),
            default=400,
        ),
        "animationEasing": string(min_length=1, default="ease-in-out"),
        "maxRetries": number(min=0, max=10, default=3),
        "retryDelay": number(min=0, max=60000, default=1000),
        "storageKey": string(min_length=1, default="products_data"),
        "cacheTimeout": union(
            number(min=0),
            enum(None),
            default=300000,
        ),
        "defaultSort": enum(*PRODUCT_SORTS, default="name-asc"),
        "availableFilters": array_of(
            enum(*PRODUCT_FILTERS), default=list(PRODUCT_FILTERS)
        ),
        "availableSorts": array_of(
            enum(*PRODUCT_SORTS), min_length=1, default=list(PRODUCT_SORTS)
        ),
    },
    name="product_listing",
)

NAVIGATION_SCHEMA = create_schema(
    {
        "mobileBreakpoint": number(min=320, max=2560),
        "scrollOffset": number(min=0, max=500),
        "animationDuration": number(min=0, max=2000),
        "throttleDelay": number(min=16, max=1000),
        "debounceDelay": number(min=16, max=1000),
        "scrollThreshold": number(min=0, max=200),
        "minViewportWidth": number(min=0),
        "maxViewportWidth": number(min=0),
        "focusTimeout": number(min=0),
        "menuTransitionDelay": number(min=0),
    },
    defaults={
        "mobileBreakpoint": 768,
        "scrollOffset": 100,
        "animationDuration": 300,
        "throttleDelay": 100,
        "debounceDelay": 250,
        "scrollThreshold": 50,
        "minViewportWidth": 320,
        "maxViewportWidth": 2560,
        "focusTimeout": 100,
        "menuTransitionDelay": 300,
    },
    name="navigation",
)

_breakpoint = compose(
    number(min=0, max=10000),
    custom(lambda value, context: float(value).is_integer()),
)

RESPONSIVE_LAYOUT_SCHEMA = create_schema(
    {
        "breakpoints": shape(
            {
                "xs": _breakpoint,
                "sm": _breakpoint,
                "md": _breakpoint,
                "lg": _breakpoint,
                "xl": _breakpoint,
                "xxl": _breakpoint,
            },
            default={"xs": 0, "sm": 576, "md": 768, "lg": 992, "xl": 1200, "xxl": 1400},
        ),
        "resizeDelay": number(min=0, max=1000, default=250),
    },
    name="responsive_layout",
)

DEFAULT_SCHEMAS: Mapping[str, Schema] = MappingProxyType(
    {
        schema.name: schema
        for schema in (
            CONTACT_FORM_SCHEMA,
            PRODUCT_LISTING_SCHEMA,
            NAVIGATION_SCHEMA,
            RESPONSIVE_LAYOUT_SCHEMA,
        )
    }
)


def get_schema(schema_name: str) -> Schema:
    """Resolve a built-in schema by name."""
    if schema_name not in DEFAULT_SCHEMAS:
        available = ", ".join(DEFAULT_SCHEMAS.keys())
        raise ValueError(f"Unknown schema: {schema_name}. Available: {available}")
    return DEFAULT_SCHEMAS[schema_name]


def list_schemas() -> List[str]:
    return list(DEFAULT_SCHEMAS.keys())


__all__ = [
    "CONTACT_FORM_SCHEMA",
    "PRODUCT_LISTING_SCHEMA",
    "NAVIGATION_SCHEMA",
    "RESPONSIVE_LAYOUT_SCHEMA",
    "DEFAULT_SCHEMAS",
    "get_schema",
    "list_schemas",
]
