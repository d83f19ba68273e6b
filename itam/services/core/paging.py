"""
Paging helpers shared by the list services
"""

from typing import Optional
from flask import current_app
from itam.buisness.lifecycle.errors import InvalidInputError


def resolve_page_args(page: Optional[int] = None, page_size: Optional[int] = None):
    """
    Apply defaults and bounds to page arguments.

    Returns:
        tuple: (page, page_size)

    Raises:
        InvalidInputError: For a page or page size below 1
    """
    page = 1 if page is None else page
    page_size = current_app.config.get('DEFAULT_PAGE_SIZE', 20) if page_size is None else page_size
    if page < 1:
        raise InvalidInputError("page must be 1 or greater", field='page')
    if page_size < 1:
        raise InvalidInputError("page_size must be 1 or greater", field='page_size')
    return page, min(page_size, current_app.config.get('MAX_PAGE_SIZE', 100))


def paginate(query, page: Optional[int] = None, page_size: Optional[int] = None):
    page, page_size = resolve_page_args(page, page_size)
    return query.paginate(page=page, per_page=page_size, error_out=False)
