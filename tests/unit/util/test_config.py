"""Unit tests for settings and container wiring."""

import pytest
from dishka import Scope, provide

from threadlens.application.session import CommentViewSession
from threadlens.config import DatabaseSettings, Settings
from threadlens.domain.service import TextMatcher, TokenWindowMatcher
from threadlens.persistence.database import create_engine
from threadlens.util.di import get_provider
from threadlens.util.di.base import ProviderBase
from threadlens.util.di.container import create_container
from threadlens.util.error import ConfigurationError, DependencyInjectionError


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PAGINATION__PAGE_SIZE", raising=False)
        monkeypatch.delenv("PAGINATION__DEBOUNCE_MS", raising=False)
        monkeypatch.delenv("DATABASE__URL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.pagination.page_size == 10
        assert settings.pagination.debounce_ms == 300
        assert settings.debounce_seconds == 0.3
        assert settings.search.fuzzy_threshold == 80.0
        assert settings.database.url.startswith("sqlite+aiosqlite")

    def test_nested_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PAGINATION__PAGE_SIZE", "25")
        monkeypatch.setenv("SEARCH__FUZZY_THRESHOLD", "90")

        settings = Settings(_env_file=None)

        assert settings.pagination.page_size == 25
        assert settings.search.fuzzy_threshold == 90.0

    def test_sync_driver_is_rejected(self):
        settings = Settings(_env_file=None, database=DatabaseSettings(url="sqlite:///x.db"))

        with pytest.raises(ConfigurationError):
            create_engine(settings)


class OrphanProvider(ProviderBase):
    __mock_component__ = "persistence"


class ProdOrphanProvider(OrphanProvider):
    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_number(self) -> int:
        return 1


class TestProviders:
    def test_missing_mock_implementation(self):
        assert get_provider(OrphanProvider, use_mock=False) is ProdOrphanProvider

        with pytest.raises(DependencyInjectionError):
            get_provider(OrphanProvider, use_mock=True)

    @pytest.mark.asyncio
    async def test_production_container_wires_a_view_session(self):
        # Arrange
        container = create_container(configure_observability=False)

        # Act
        async with container() as request_container:
            session = await request_container.get(CommentViewSession)
            matcher = await request_container.get(TextMatcher)
            await session.switch_context("video-1")

        await container.close()

        # Assert
        assert isinstance(matcher, TokenWindowMatcher)
        assert session.visible == ()
        assert session.total_count == 0
