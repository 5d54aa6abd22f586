"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container

from threadlens.util.di import PROVIDERS, Component, get_provider


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container where mockable components default to their mocks.

    Args:
        unmock: Components to use production implementations for

    Returns:
        Configured test container

    Raises:
        ValueError: If unmock names a component that has no mock

    Examples:
        # In-memory repositories
        container = build_test_container()

        # SQLAlchemy store (DATABASE__URL from the environment)
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    provider_instances = []
    for base in PROVIDERS:
        component_name = base.__mock_component__
        use_mock = bool(base.__subclasses__()) and component_name not in unmock
        provider_instances.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*provider_instances)


def _validate_unmock(unmock: set[Component]) -> None:
    mockable = {p.__mock_component__ for p in PROVIDERS if p.__subclasses__()}
    unknown = unmock - mockable
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")
