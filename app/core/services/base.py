"""Shared state handling for the class-level email services."""


class SingletonService:
    """Mixin for services used through class methods only.

    BrevoService, Renderer and EmailManagerService are configured once at
    startup and then called as classes. Each sets ``_initialized`` at the end
    of its own ``init``/``initialize`` method; the lifespan hook and the
    health check read it through ``is_initialized()``.
    """

    _initialized: bool = False

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._initialized

    @classmethod
    def _require_initialized(cls) -> None:
        """Raise RuntimeError if the service has not been set up yet."""
        if not cls._initialized:
            raise RuntimeError(f"{cls.__name__} not initialized")

    @classmethod
    def _reset(cls) -> None:
        """Forget the initialized state. Used by tests."""
        cls._initialized = False
