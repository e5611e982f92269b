import httpx

from loguru import logger
from pydantic import ValidationError
from typing import (
    Any,
    Callable
)

from universe.application.events import (
    EventChannel,
    Handler,
    invoke
)
from universe.application.services.resource_service import ResourceService
from universe.application.services.token_service import TokenService
from universe.config.settings import (
    ConfigurationError,
    Context,
    Settings,
    UniverseOptions
)
from universe.domain.errors import ApiError
from universe.domain.models.resource import (
    HttpResource,
    JsonpResource
)
from universe.domain.models.result import Result
from universe.domain.models.token import (
    TokenResponse,
    TokenState
)
from universe.domain.repository.credential_store import CredentialStore
from universe.domain.repository.token_repository import TokenRepository
from universe.infra.client.universe_client import UniverseClient
from universe.infra.persistence.credential_store_memory import MemoryCredentialStore

Callback = Callable[[Result], Any]

FANCLUB_PATH = "/fanclub"
ACCOUNT_PATH = "/account"


class Universe:
    """Client for one authenticated (or anonymous) Universe session.

    Operations return a ``Result``. When a callback is given it receives the
    same ``Result`` before any event listener does.
    """

    def __init__(
        self,
        key: str,
        environment: str = "production",
        context: Context | dict[str, Any] | None = None,
        store: CredentialStore | None = None,
        settings: Settings | None = None,
        http: httpx.AsyncClient | None = None,
    ):
        try:
            self.options = UniverseOptions(environment=environment, key=key, context=context)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid Universe options: {e}") from e

        self.settings = settings or Settings()

        self.client = UniverseClient(self.settings, self.options.environment, http=http)
        self.tokens = TokenService(
            self.client,
            TokenRepository(store or MemoryCredentialStore(), prefix=self.settings.STORAGE_PREFIX),
            single_flight=self.settings.SINGLE_FLIGHT_REFRESH,
        )
        self.resources = ResourceService(self.settings.api_root(self.options.environment), self.options.key, self.tokens)
        self.events = EventChannel()

    async def __aenter__(self) -> "Universe":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    def on(self, event: str, handler: Handler) -> Handler:
        return self.events.on(event, handler)

    def off(self, event: str, handler: Handler) -> None:
        self.events.off(event, handler)

    async def init(self, callback: Callback | None = None) -> Result:
        """Load the fanclub and the logged in customer, then emit ready or error."""
        state = await self.tokens.ensure_valid_token()

        try:
            fanclub = await self.__fanclub(state)
            customer = await self.__customer(state)
        except ApiError as e:
            logger.warning("Universe init failed: {}", e)
            result = Result.failure(e)
        else:
            result = Result.success({"fanclub": fanclub, "customer": customer})

        if callback is not None:
            await invoke(callback, result)

        if result.ok:
            await self.events.emit("ready", result.data)
        else:
            await self.events.emit("error", result.error)

        return result

    async def get(self, path: str, callback: Callback | None = None, jsonp: bool = False) -> Result:
        return await self.__call("GET", path, None, callback, jsonp)

    async def post(self, path: str, body: dict[str, Any] | None = None, callback: Callback | None = None, jsonp: bool = False) -> Result:
        return await self.__call("POST", path, body, callback, jsonp)

    def resource(self, path: Any) -> HttpResource | Any:
        """Descriptor for a relative path; URLs, scalars and {"url": ...} holders expand in place."""
        return self.resources.resolve(path)

    def jsonp_resource(self, path: str) -> JsonpResource:
        return self.resources.jsonp_resource(path)

    def render(self, view: dict[str, Any], renderer: Callable[[dict[str, Any]], Any] | None = None) -> Any:
        """Expand the view's resources and hand the view to the renderer."""
        if view.get("resources"):
            view = {**view, "resources": self.resources.expand_resources(view["resources"])}

        return renderer(view) if renderer is not None else view

    def login(self, payload: dict[str, Any] | TokenResponse) -> None:
        self.tokens.login(payload)

    def logout(self) -> None:
        self.tokens.logout()

    async def __call(self, method: str, path: str, body: dict[str, Any] | None, callback: Callback | None, jsonp: bool) -> Result:
        state = await self.tokens.ensure_valid_token()

        resource = self.jsonp_resource(path) if jsonp else self.resources.resource(path, state)

        try:
            result = Result.success(await self.client.request(resource, method, body))
        except ApiError as e:
            logger.info("{} {} failed: {}", method, path, e)
            result = Result.failure(e)

        if callback is not None:
            await invoke(callback, result)

        return result

    async def __fanclub(self, state: TokenState) -> Any:
        context = self.options.context

        if context is not None and context.resources.get("fanclub") is not None:
            return self.__unwrap(context.resources["fanclub"], "fanclub")

        data = await self.client.request(self.resources.resource(FANCLUB_PATH, state))

        return self.__unwrap(data, "fanclub")

    async def __customer(self, state: TokenState) -> Any:
        if not state.authenticated:
            return None

        data = await self.client.request(self.resources.resource(ACCOUNT_PATH, state))

        return self.__unwrap(data, "customer")

    @staticmethod
    def __unwrap(data: Any, name: str) -> Any:
        if isinstance(data, dict) and name in data:
            return data[name]

        return data
