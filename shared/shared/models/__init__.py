from shared.models.user import CurrentUser
from shared.models.pagination import PaginatedResponse, page_offset

__all__ = ["CurrentUser", "PaginatedResponse", "page_offset"]
