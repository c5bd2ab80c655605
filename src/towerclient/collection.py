from typing import Generic, Iterator, TypeVar
from structlog import get_logger

from ._utils import load_json
from .api import Api
from .resources import Resource

log = get_logger()

R = TypeVar("R", bound=Resource)


class Collection(Generic[R]):
    """
    All objects of one resource type, fetched lazily page by page.
    """

    def __init__(self, api: Api, klass: type[R]):
        self.api = api
        self.klass = klass

    def __repr__(self) -> str:
        return f"Collection({self.klass.__name__})"

    def __iter__(self) -> Iterator[R]:
        return self.all()

    def all(self, **params) -> Iterator[R]:
        """
        Yield every object, following ``next`` links of paginated responses.
        """
        path: str | None = f"{self.klass.endpoint}/"
        pages = 0
        while path:
            response = self.api.get(path, params=params or None)
            yield from self.klass.collection_for(self.api, response.body)
            pages += 1
            document = load_json(response.body)
            path = document.get("next") if isinstance(document, dict) else None
            # next links already carry the query string
            params = {}
        log.debug("collection fetched", endpoint=self.klass.endpoint, pages=pages)

    def find(self, id: int | str) -> R:
        return self.klass.find(self.api, id)

    def create(self, **attrs) -> R:
        response = self.api.post(f"{self.klass.endpoint}/", attrs)
        return self.klass(self.api, response.body)
