"""Tests unitaires pour MetricsExporter et create_prometheus_client."""

import pytest
from prometheus_client import CONTENT_TYPE_LATEST

from fixtures.rpc_fixtures import NODE_URL
from parity_exporter.composants.collector import NodeCollector
from parity_exporter.composants.exporter import MetricsExporter, create_prometheus_client


def test_render_avant_premier_cycle(registry, fake_client):
    NodeCollector(NODE_URL, registry, client=fake_client)
    exporter = MetricsExporter(registry)

    texte = exporter.render().decode("utf-8")

    assert "# HELP parity_up Parity up/down" in texte
    assert "parity_up 0.0" in texte
    assert "parity_version{" not in texte


def test_content_type():
    assert MetricsExporter(None).content_type == CONTENT_TYPE_LATEST


@pytest.mark.asyncio
async def test_serve_metrics_apres_refresh(registry, fake_client):
    collector = NodeCollector(NODE_URL, registry, client=fake_client)
    exporter = MetricsExporter(registry)
    await collector.refresh()

    response = await exporter.serve_metrics()

    assert response.headers["content-type"] == CONTENT_TYPE_LATEST
    corps = response.body.decode("utf-8")
    assert 'parity_version{value="Parity/v2.5.0"} 1.0' in corps
    assert "parity_current_block 100.0" in corps
    assert 'parity_enode_address{value="enode://abc"} 1.0' in corps


@pytest.mark.asyncio
async def test_serve_metrics_ne_declenche_pas_de_collecte(registry, fake_client):
    NodeCollector(NODE_URL, registry, client=fake_client)

    await MetricsExporter(registry).serve_metrics()

    assert fake_client.appels == []


@pytest.mark.asyncio
async def test_create_prometheus_client(fake_client):
    client = create_prometheus_client(NODE_URL, client=fake_client)
    refresh = client.create_metrics()

    await refresh()
    response = await client.serve_metrics()

    assert "parity_max_peers 50.0" in response.body.decode("utf-8")


def test_registres_independants(fake_client):
    premier = create_prometheus_client(NODE_URL, client=fake_client)
    second = create_prometheus_client(NODE_URL, client=fake_client)

    premier.create_metrics()
    second.create_metrics()

    assert premier.registry is not second.registry


@pytest.mark.asyncio
async def test_create_metrics_appele_deux_fois(fake_client):
    client = create_prometheus_client(NODE_URL, client=fake_client)

    premier = client.create_metrics()
    second = client.create_metrics()
    await second()

    assert premier == second
    assert client.registry.get_sample_value("parity_current_block") == 100
    assert len(fake_client.appels) == 4
