"""Application interfaces (ports): catalog, authorization and query protocols."""

from objectsearch.application.interfaces.queries import (
    HINT_PAGE_NUMBER,
    IQueryTranslator,
    IRequestFiltering,
    IRequestPagination,
    IRequestSorting,
    ISearchQuery,
    ISearchQueryFactory,
)
from objectsearch.application.interfaces.services import (
    IAuthorizationChecker,
    IMetadataCatalog,
    IOrganizationalContext,
    IPermissionConfigProvider,
)

__all__ = [
    "HINT_PAGE_NUMBER",
    "IAuthorizationChecker",
    "IMetadataCatalog",
    "IOrganizationalContext",
    "IPermissionConfigProvider",
    "IQueryTranslator",
    "IRequestFiltering",
    "IRequestPagination",
    "IRequestSorting",
    "ISearchQuery",
    "ISearchQueryFactory",
]
