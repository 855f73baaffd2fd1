"""
Small helpers shared by the query engine, the recommender and the API.
"""

from typing import List, Optional, Sequence, TypeVar

T = TypeVar('T')

# Every paginated listing serves this many items per page
PAGE_SIZE = 20

PLACEHOLDER_POSTER = '/placeholder-poster.svg'
PLACEHOLDER_BACKDROP = '/placeholder-backdrop.svg'


def paginate(items: Sequence[T], page: int, page_size: int = PAGE_SIZE) -> List[T]:
	"""
	Return the 1-based page window [(page-1)*size, page*size).
	Pages before the first or past the end are empty, never an error.
	"""
	if page < 1:
		return []
	start = (page - 1) * page_size
	return list(items[start:start + page_size])


def image_url(path: Optional[str], size: str = 'w500') -> str:
	"""
	Resolve a poster/backdrop path into something a browser can load.
	Missing paths map to a placeholder image, absolute URLs pass through,
	relative paths are rooted.
	"""
	if not path:
		return PLACEHOLDER_BACKDROP if 'backdrop' in size else PLACEHOLDER_POSTER
	if path.startswith('http'):
		return path
	return path if path.startswith('/') else f'/{path}'
