from storebuilder.models.store import MemberRole, Store, StoreMember, StoreStatus  # noqa: F401
from storebuilder.models.content import (  # noqa: F401
    PROTECTED_SLUGS,
    SYSTEM_PAGE_SLUGS,
    Page,
    PageType,
    Section,
)
from storebuilder.models.design import HeaderFooterSettings, NavigationItem, NavLocation, Theme  # noqa: F401
from storebuilder.models.template import PageTemplate  # noqa: F401
