# storebuilder/section_registry.py
# Static catalog: section_type -> label, category, default config and config schema
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping

from jsonschema import Draft202012Validator

from storebuilder.core.errors import SectionRegistryError, ValidationError

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


class SectionType(str, Enum):
    # Header/Footer
    header = "header"
    footer = "footer"
    # Hero
    hero_banner = "hero_banner"
    hero_slider = "hero_slider"
    hero_video = "hero_video"
    # Products
    featured_products = "featured_products"
    product_grid = "product_grid"
    product_carousel = "product_carousel"
    new_arrivals = "new_arrivals"
    best_sellers = "best_sellers"
    product_filters = "product_filters"
    product_sort = "product_sort"
    recently_viewed = "recently_viewed"
    recommended_products = "recommended_products"
    product_reviews = "product_reviews"
    # Categories
    category_grid = "category_grid"
    category_banner = "category_banner"
    # Content
    text_block = "text_block"
    image_text = "image_text"
    gallery = "gallery"
    testimonials = "testimonials"
    faq = "faq"
    # Marketing
    announcement_bar = "announcement_bar"
    newsletter = "newsletter"
    countdown = "countdown"
    promo_banner = "promo_banner"
    # Social/Trust
    social_feed = "social_feed"
    trust_badges = "trust_badges"
    brand_logos = "brand_logos"
    # Custom / layout
    custom_html = "custom_html"
    spacer = "spacer"
    divider = "divider"


# Palette order
SECTION_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("hero", "Hero"),
    ("products", "Products"),
    ("categories", "Categories"),
    ("content", "Content"),
    ("marketing", "Marketing"),
    ("social", "Social & Trust"),
    ("layout", "Layout"),
)

# Managed through header/footer settings, never offered in the palette
PALETTE_EXCLUDED = frozenset({SectionType.header.value, SectionType.footer.value})


@dataclass(frozen=True)
class SectionDefinition:
    type: str
    label: str
    category: str
    description: str = ""
    icon: str = "Layout"
    defaults: Mapping[str, Any] = field(default_factory=dict)
    schema: Mapping[str, Any] = field(default_factory=dict)

    def default_config(self) -> Dict[str, Any]:
        # Fresh copy per call; callers are free to mutate it
        return copy.deepcopy(dict(self.defaults))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "label": self.label,
            "category": self.category,
            "description": self.description,
            "icon": self.icon,
            "default_config": self.default_config(),
            "schema": copy.deepcopy(dict(self.schema)),
        }


# -------- schema helpers --------
def _infer(value: Any) -> Dict[str, Any]:
    if isinstance(value, bool):
        return {"type": "boolean"}
    if isinstance(value, int):
        return {"type": "integer"}
    if isinstance(value, float):
        return {"type": "number"}
    if isinstance(value, str):
        return {"type": "string"}
    if isinstance(value, list):
        return {"type": "array"}
    if isinstance(value, dict):
        return {"type": "object"}
    return {}


def _schema_for(defaults: Dict[str, Any], **overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Property types are inferred from the default values; `overrides` adds
    constraints (enums, ranges) or declares fields that have no default.
    Unknown keys stay allowed so older editors keep working after a field is added.
    """
    props = {key: _infer(val) for key, val in defaults.items()}
    for key, extra in overrides.items():
        props[key] = {**props.get(key, {}), **extra}
    return {
        "$schema": JSON_SCHEMA_DIALECT,
        "type": "object",
        "properties": props,
        "additionalProperties": True,
    }


def _enum(*values: Any) -> Dict[str, Any]:
    return {"enum": list(values)}


def _range(minimum: int, maximum: int) -> Dict[str, Any]:
    return {"minimum": minimum, "maximum": maximum}


ALIGNMENT = _enum("left", "center", "right")
HERO_HEIGHT = _enum("small", "medium", "large", "full")
COLUMNS = _range(1, 6)
PRODUCT_COUNT = _range(1, 48)


def _define(
    section_type: SectionType,
    label: str,
    category: str,
    description: str,
    icon: str,
    defaults: Dict[str, Any],
    **constraints: Dict[str, Any],
) -> SectionDefinition:
    return SectionDefinition(
        type=section_type.value,
        label=label,
        category=category,
        description=description,
        icon=icon,
        defaults=MappingProxyType(defaults),
        schema=MappingProxyType(_schema_for(defaults, **constraints)),
    )


def _product_list(title: str) -> Dict[str, Any]:
    return {
        "title": title,
        "subtitle": "",
        "productCount": 4,
        "columns": 4,
        "showPrice": True,
        "showAddToCart": True,
    }


_DEFINITIONS: List[SectionDefinition] = [
    # ---- layout (header/footer are not in the palette) ----
    _define(
        SectionType.header, "Header", "layout", "Store header with logo and navigation", "LayoutTop",
        {"useStoreSettings": True},
    ),
    _define(
        SectionType.footer, "Footer", "layout", "Store footer with links and newsletter", "LayoutBottom",
        {"useStoreSettings": True},
    ),
    # ---- hero ----
    _define(
        SectionType.hero_banner, "Hero Banner", "hero", "Large banner with headline and call to action", "Image",
        {
            "title": "Welcome to our store",
            "subtitle": "Discover our latest collection",
            "buttonText": "Shop Now",
            "buttonLink": "/products",
            "secondaryButtonText": "",
            "secondaryButtonLink": "",
            "backgroundImage": "",
            "backgroundOverlay": 40,
            "textAlignment": "center",
            "height": "large",
        },
        backgroundOverlay=_range(0, 100),
        textAlignment=ALIGNMENT,
        height=HERO_HEIGHT,
    ),
    _define(
        SectionType.hero_slider, "Hero Slider", "hero", "Rotating banner slides", "Layers",
        {"slides": [], "autoplay": True, "interval": 5, "showDots": True, "showArrows": True, "height": "large"},
        interval=_range(1, 60),
        height=HERO_HEIGHT,
    ),
    _define(
        SectionType.hero_video, "Hero Video", "hero", "Full-width background video", "Video",
        {
            "videoUrl": "",
            "posterImage": "",
            "title": "",
            "subtitle": "",
            "autoplay": True,
            "muted": True,
            "loop": True,
            "height": "large",
        },
        height=HERO_HEIGHT,
    ),
    # ---- products ----
    _define(
        SectionType.featured_products, "Featured Products", "products", "Hand-picked products", "Star",
        {**_product_list("Featured Products"), "productIds": []},
        productCount=PRODUCT_COUNT,
        columns=COLUMNS,
    ),
    _define(
        SectionType.product_grid, "Product Grid", "products", "Grid of products from the catalog", "Grid3x3",
        {**_product_list("All Products"), "productCount": 8, "showFilters": False},
        productCount=PRODUCT_COUNT,
        columns=COLUMNS,
    ),
    _define(
        SectionType.product_carousel, "Product Carousel", "products", "Horizontally scrolling products",
        "ChevronLeftRight",
        {"title": "Trending Now", "productCount": 8, "autoplay": False, "showPrice": True, "showArrows": True},
        productCount=PRODUCT_COUNT,
    ),
    _define(
        SectionType.new_arrivals, "New Arrivals", "products", "Most recently added products", "Sparkles",
        _product_list("New Arrivals"),
        productCount=PRODUCT_COUNT,
        columns=COLUMNS,
    ),
    _define(
        SectionType.best_sellers, "Best Sellers", "products", "Top selling products", "TrendingUp",
        _product_list("Best Sellers"),
        productCount=PRODUCT_COUNT,
        columns=COLUMNS,
    ),
    _define(
        SectionType.product_filters, "Product Filters", "products", "Price, category and attribute filters",
        "LayoutGrid",
        {
            "showPriceFilter": True,
            "showCategoryFilter": True,
            "showAttributeFilters": True,
            "layout": "sidebar",
            "collapsible": True,
        },
        layout=_enum("sidebar", "horizontal", "drawer"),
    ),
    _define(
        SectionType.product_sort, "Product Sort", "products", "Sort dropdown for product listings", "ArrowUpDown",
        {"options": ["newest", "price_asc", "price_desc", "name_asc", "name_desc", "popular"], "defaultSort": "newest"},
        options={
            "type": "array",
            "items": _enum("price_asc", "price_desc", "name_asc", "name_desc", "newest", "popular"),
        },
        defaultSort=_enum("price_asc", "price_desc", "name_asc", "name_desc", "newest", "popular"),
    ),
    _define(
        SectionType.recently_viewed, "Recently Viewed", "products", "Products the shopper looked at", "Clock",
        {"title": "Recently Viewed", "productCount": 4, "columns": 4, "showPrice": True},
        productCount=PRODUCT_COUNT,
        columns=_enum(2, 3, 4, 5),
    ),
    _define(
        SectionType.recommended_products, "Recommended Products", "products", "Personalised recommendations",
        "Sparkles",
        {**_product_list("You May Also Like"), "algorithm": "similar"},
        productCount=PRODUCT_COUNT,
        columns=_enum(2, 3, 4, 5),
        algorithm=_enum("similar", "bestsellers", "random"),
    ),
    _define(
        SectionType.product_reviews, "Product Reviews", "products", "Ratings and customer reviews", "Quote",
        {
            "title": "Customer Reviews",
            "showRatingBreakdown": True,
            "showPhotos": True,
            "sortBy": "newest",
            "pageSize": 10,
        },
        sortBy=_enum("newest", "highest", "lowest", "helpful"),
        pageSize=_range(1, 100),
    ),
    # ---- categories ----
    _define(
        SectionType.category_grid, "Category Grid", "categories", "Browse by category tiles", "LayoutGrid",
        {"title": "Shop by Category", "columns": 3, "categoryIds": [], "showProductCount": True, "imageStyle": "square"},
        columns=COLUMNS,
        imageStyle=_enum("square", "circle", "portrait"),
    ),
    _define(
        SectionType.category_banner, "Category Banner", "categories", "Promote a single category", "ImagePlus",
        {"title": "", "subtitle": "", "categoryId": "", "backgroundImage": "", "buttonText": "Shop Now"},
    ),
    # ---- content ----
    _define(
        SectionType.text_block, "Text Block", "content", "Rich text content", "Type",
        {"content": "<p>Text content here...</p>", "alignment": "left", "maxWidth": "medium"},
        alignment=ALIGNMENT,
        maxWidth=_enum("small", "medium", "large", "full"),
    ),
    _define(
        SectionType.image_text, "Image with Text", "content", "Image beside a block of text", "Columns",
        {"title": "", "content": "", "image": "", "imagePosition": "left", "buttonText": "", "buttonLink": ""},
        imagePosition=_enum("left", "right"),
    ),
    _define(
        SectionType.gallery, "Gallery", "content", "Grid of images", "Images",
        {"title": "", "images": [], "columns": 3, "gap": "medium", "lightbox": True},
        columns=COLUMNS,
        gap=_enum("none", "small", "medium", "large"),
    ),
    _define(
        SectionType.testimonials, "Testimonials", "content", "Customer quotes", "Quote",
        {"title": "What Our Customers Say", "items": [], "layout": "grid", "showRating": True},
        layout=_enum("grid", "carousel", "list"),
    ),
    _define(
        SectionType.faq, "FAQ", "content", "Questions and answers", "HelpCircle",
        {"title": "Frequently Asked Questions", "items": [], "allowMultipleOpen": False},
    ),
    # ---- marketing ----
    _define(
        SectionType.announcement_bar, "Announcement Bar", "marketing", "Thin bar for short announcements",
        "Megaphone",
        {"text": "Free shipping on orders over $50", "link": "", "backgroundColor": "", "textColor": "",
         "dismissible": True},
    ),
    _define(
        SectionType.newsletter, "Newsletter", "marketing", "Email signup form", "Mail",
        {
            "title": "Subscribe to our newsletter",
            "subtitle": "Get the latest updates and offers.",
            "buttonText": "Subscribe",
            "placeholder": "Enter your email",
        },
    ),
    _define(
        SectionType.countdown, "Countdown", "marketing", "Timer counting down to a date", "Clock",
        {"title": "Sale ends in", "endDate": "", "showDays": True, "buttonText": "Shop the Sale",
         "buttonLink": "/products"},
    ),
    _define(
        SectionType.promo_banner, "Promo Banner", "marketing", "Promotional banner with offer", "BadgePercent",
        {"title": "Limited Time Offer", "subtitle": "", "buttonText": "Shop Now", "buttonLink": "/products",
         "backgroundImage": "", "backgroundColor": ""},
    ),
    # ---- social / trust ----
    _define(
        SectionType.social_feed, "Social Feed", "social", "Latest posts from a social account", "Instagram",
        {"title": "Follow Us", "platform": "instagram", "handle": "", "postCount": 6},
        platform=_enum("instagram", "tiktok", "facebook", "twitter", "pinterest"),
        postCount=_range(1, 24),
    ),
    _define(
        SectionType.trust_badges, "Trust Badges", "social", "Shipping, returns and payment guarantees",
        "ShieldCheck",
        {
            "title": "Why Choose Us",
            "badges": [
                {"icon": "truck", "title": "Free Shipping", "description": "On orders over $50"},
                {"icon": "refresh", "title": "Easy Returns", "description": "30-day return policy"},
                {"icon": "lock", "title": "Secure Checkout", "description": "Your data is protected"},
            ],
        },
    ),
    _define(
        SectionType.brand_logos, "Brand Logos", "social", "Logos of partner brands", "Building",
        {"title": "Trusted by", "logos": [], "grayscale": True},
    ),
    # ---- layout ----
    _define(
        SectionType.custom_html, "Custom HTML", "layout", "Raw HTML snippet", "Code",
        {"html": ""},
    ),
    _define(
        SectionType.spacer, "Spacer", "layout", "Vertical whitespace", "ArrowUpDown",
        {"height": "medium"},
        height=_enum("small", "medium", "large", "xlarge"),
    ),
    _define(
        SectionType.divider, "Divider", "layout", "Horizontal rule", "Minus",
        {"style": "solid", "width": "full", "color": ""},
        style=_enum("solid", "dashed", "dotted"),
        width=_enum("small", "medium", "full"),
    ),
]

SECTION_REGISTRY: Mapping[str, SectionDefinition] = MappingProxyType({d.type: d for d in _DEFINITIONS})

# Fallback for stored rows whose type this build doesn't know yet
GENERIC_DEFINITION = SectionDefinition(
    type="generic",
    label="Section",
    category="layout",
    description="Section type without a dedicated editor",
    defaults=MappingProxyType({}),
    schema=MappingProxyType({"$schema": JSON_SCHEMA_DIALECT, "type": "object"}),
)


def parse_section_type(value: str) -> SectionType:
    try:
        return SectionType(value)
    except ValueError:
        raise ValidationError(f"Unknown section_type '{value}'.") from None


def lookup(section_type: str, registry: Mapping[str, SectionDefinition] = SECTION_REGISTRY) -> SectionDefinition:
    """
    Strict lookup, used before anything is written.
    An unknown string is a validation error; a known enum member without
    an entry means the registry is out of date and nothing must be persisted.
    """
    st = parse_section_type(section_type)
    definition = registry.get(st.value)
    if definition is None:
        raise SectionRegistryError(f"No registry entry for section_type '{st.value}'.")
    return definition


def resolve(section_type: str, registry: Mapping[str, SectionDefinition] = SECTION_REGISTRY) -> SectionDefinition:
    """Lenient lookup for reads: unknown types degrade to the generic definition."""
    return registry.get(section_type, GENERIC_DEFINITION)


def verify_registry(registry: Mapping[str, SectionDefinition] = SECTION_REGISTRY) -> List[str]:
    """Enum members that have no registry entry (should be empty)."""
    return [st.value for st in SectionType if st.value not in registry]


def palette(registry: Mapping[str, SectionDefinition] = SECTION_REGISTRY) -> List[Dict[str, Any]]:
    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for definition in registry.values():
        if definition.type in PALETTE_EXCLUDED:
            continue
        grouped.setdefault(definition.category, []).append(
            {
                "type": definition.type,
                "label": definition.label,
                "description": definition.description,
                "icon": definition.icon,
            }
        )
    return [
        {"id": cat_id, "label": cat_label, "sections": grouped[cat_id]}
        for cat_id, cat_label in SECTION_CATEGORIES
        if grouped.get(cat_id)
    ]


def validate_config(section_type: str, config: Dict[str, Any], *, field_name: str = "config") -> None:
    definition = resolve(section_type)
    validator = Draft202012Validator(dict(definition.schema))
    errors = sorted(validator.iter_errors(config), key=lambda e: [str(p) for p in e.path])
    if errors:
        e = errors[0]
        path = ".".join([str(p) for p in e.path])
        raise ValidationError(f"Invalid {field_name} for '{section_type}' at '{path}': {e.message}")
