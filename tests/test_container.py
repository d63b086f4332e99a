"""Tests for container wiring."""

import asyncio

from health_lover.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.personalization_service.cache is container.cache
    assert container.recommendation_service.cache is container.cache
    assert container.cache.ttl_seconds == 1800
    asyncio.run(container.close_resources())
