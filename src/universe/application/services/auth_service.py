from universe.application.services.universe_service import Universe


class AuthService:
    def __init__(self, universe: Universe):
        self.__universe = universe

    async def status(self) -> dict:
        state = await self.__universe.tokens.ensure_valid_token()
        token_bundle = self.__universe.tokens.repository.get()

        return {
            "logged_in": state.authenticated,
            "has_refresh": token_bundle.has_refresh,
            "access_token_expiration": token_bundle.access_token_expiration,
            "refresh_token_expiration": token_bundle.refresh_token_expiration,
        }

    def logout(self) -> dict:
        self.__universe.logout()

        return {"message": "Logged out"}
