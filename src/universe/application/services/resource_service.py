from typing import (
    Any,
    Mapping
)

from universe.application.services.token_service import TokenService
from universe.domain.models.resource import (
    AbsoluteUrl,
    HttpResource,
    JsonpResource,
    PathLike,
    RelativePath,
    Scalar,
    WrappedUrl,
    classify
)
from universe.domain.models.token import TokenState


class ResourceService:
    """Turns Universe paths into request descriptors.

    The Authorization header comes from the token state passed in, or from
    the token service at call time.
    """

    def __init__(self, api_root: str, key: str, tokens: TokenService):
        self.__api_root = api_root.rstrip("/")
        self.__key = key
        self.__tokens = tokens

    def url(self, path: str) -> str:
        return f"{self.__api_root}{path}"

    def auth_headers(self, state: TokenState | None = None) -> dict[str, str]:
        if state is None:
            state = self.__tokens.current()

        if not state.authenticated:
            return {}

        return {"Authorization": f"Bearer {state.token}"}

    def resource(self, path: str, state: TokenState | None = None) -> HttpResource:
        return HttpResource(
            url=self.url(path),
            query={"key": self.__key},
            with_credentials=True,
            headers=self.auth_headers(state),
        )

    def jsonp_resource(self, path: str) -> JsonpResource:
        return JsonpResource(url=self.url(path))

    def resolve(self, value: Any, state: TokenState | None = None) -> Any:
        """Descriptor for a relative path, anything else expanded in place."""
        tagged = classify(value)

        if isinstance(tagged, RelativePath):
            return self.resource(tagged.path, state)

        return self.__expand(tagged)

    def expand(self, value: Any) -> Any:
        resolved = self.resolve(value)

        return resolved.model_dump() if isinstance(resolved, HttpResource) else resolved

    def expand_resources(self, resources: Mapping[str, Any]) -> dict[str, Any]:
        return {name: self.expand(value) for name, value in resources.items()}

    def __expand(self, tagged: PathLike) -> Any:
        match tagged:
            case RelativePath(path):
                return self.resource(path).model_dump()
            case AbsoluteUrl(url):
                return url
            case Scalar(value):
                return value
            case WrappedUrl(holder, RelativePath(path)):
                return {**holder, "url": self.url(path)}
            case WrappedUrl(holder, _):
                return dict(holder)
