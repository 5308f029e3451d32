"""Tests unitaires pour NodeCollector."""

import asyncio

import pytest

from fixtures.rpc_fixtures import (
    NODE_URL,
    ClientBloque,
    FakeClientNoeud,
    etat_registre,
    reponses_nominales,
)
from parity_exporter.composants.collector import NodeCollector, create_metrics
from parity_exporter.domain import ResultatRpc


def _valeur(registry, nom, **labels):
    return registry.get_sample_value(nom, labels or None)


@pytest.mark.asyncio
async def test_refresh_nominal_met_a_jour_toutes_les_jauges(registry, fake_client):
    collector = NodeCollector(NODE_URL, registry, client=fake_client)

    await collector.refresh()

    assert _valeur(registry, "parity_up") == 1
    assert _valeur(registry, "parity_version", value="Parity/v2.5.0") == 1
    assert _valeur(registry, "parity_sync_status") == 0
    assert _valeur(registry, "parity_current_block") == 100
    assert _valeur(registry, "parity_active_peers") == 3
    assert _valeur(registry, "parity_connected_peers") == 5
    assert _valeur(registry, "parity_max_peers") == 50
    assert _valeur(registry, "parity_enode_address", value="enode://abc") == 1


@pytest.mark.asyncio
async def test_refresh_lance_les_quatre_appels(registry, fake_client):
    collector = NodeCollector(NODE_URL, registry, client=fake_client)

    await collector.refresh()

    methodes = sorted(appel[1] for appel in fake_client.appels)
    assert methodes == ["eth_blockNumber", "eth_syncing", "parity_enode", "web3_clientVersion"]
    assert all(appel[0] == NODE_URL for appel in fake_client.appels)


@pytest.mark.asyncio
async def test_version_en_echec_premier_cycle(registry, reponses):
    reponses["web3_clientVersion"] = ResultatRpc.echec("connexion refusee")
    collector = NodeCollector(NODE_URL, registry, client=FakeClientNoeud(reponses))

    await collector.refresh()

    assert _valeur(registry, "parity_up") == 0
    assert _valeur(registry, "parity_version", value="Parity/v2.5.0") is None
    assert _valeur(registry, "parity_enode_address", value="enode://abc") is None
    assert _valeur(registry, "parity_current_block") == 0


@pytest.mark.asyncio
async def test_version_en_echec_ne_modifie_que_up(registry):
    client = FakeClientNoeud(reponses_nominales())
    collector = NodeCollector(NODE_URL, registry, client=client)
    await collector.refresh()
    avant = etat_registre(registry)

    client.reponses["web3_clientVersion"] = ResultatRpc.echec("HTTP 502")
    client.reponses["eth_blockNumber"] = ResultatRpc.succes("0x65")
    await collector.refresh()

    apres = etat_registre(registry)
    assert apres.pop(("parity_up", ())) == 0
    avant.pop(("parity_up", ()))
    assert apres == avant


@pytest.mark.asyncio
async def test_sync_en_echec_met_sync_status_a_zero(registry, reponses):
    reponses["eth_syncing"] = ResultatRpc.echec("methode inconnue")
    collector = NodeCollector(NODE_URL, registry, client=FakeClientNoeud(reponses))

    await collector.refresh()

    assert _valeur(registry, "parity_up") == 1
    assert _valeur(registry, "parity_version", value="Parity/v2.5.0") == 1
    assert _valeur(registry, "parity_sync_status") == 0
    assert _valeur(registry, "parity_current_block") == 100
    assert _valeur(registry, "parity_connected_peers") == 5


@pytest.mark.asyncio
async def test_sync_en_cours_calcule_le_retard(registry, reponses):
    reponses["eth_syncing"] = ResultatRpc.succes(
        {"startingBlock": "0x0", "currentBlock": "0x5", "highestBlock": "0x10"}
    )
    collector = NodeCollector(NODE_URL, registry, client=FakeClientNoeud(reponses))

    await collector.refresh()

    assert _valeur(registry, "parity_sync_status") == 11


@pytest.mark.asyncio
async def test_sync_status_negatif_non_borne(registry, reponses):
    reponses["eth_syncing"] = ResultatRpc.succes({"currentBlock": "0x10", "highestBlock": "0x5"})
    collector = NodeCollector(NODE_URL, registry, client=FakeClientNoeud(reponses))

    await collector.refresh()

    assert _valeur(registry, "parity_sync_status") == -11


@pytest.mark.asyncio
async def test_refresh_idempotent(registry, fake_client):
    collector = NodeCollector(NODE_URL, registry, client=fake_client)

    await collector.refresh()
    premier = etat_registre(registry)
    await collector.refresh()

    assert etat_registre(registry) == premier


@pytest.mark.asyncio
async def test_nouvelle_version_remplace_le_label(registry):
    client = FakeClientNoeud(reponses_nominales())
    collector = NodeCollector(NODE_URL, registry, client=client)
    await collector.refresh()

    client.reponses["web3_clientVersion"] = ResultatRpc.succes("Parity/v2.7.2")
    await collector.refresh()

    assert _valeur(registry, "parity_version", value="Parity/v2.5.0") is None
    assert _valeur(registry, "parity_version", value="Parity/v2.7.2") == 1


@pytest.mark.asyncio
async def test_enode_absent_laisse_la_jauge_intacte(registry):
    client = FakeClientNoeud(reponses_nominales())
    collector = NodeCollector(NODE_URL, registry, client=client)
    await collector.refresh()

    client.reponses["parity_enode"] = ResultatRpc.succes({"active": 1, "connected": 2, "max": 25})
    await collector.refresh()

    assert _valeur(registry, "parity_enode_address", value="enode://abc") == 1
    assert _valeur(registry, "parity_active_peers") == 1


@pytest.mark.asyncio
async def test_pairs_encodes_en_hexadecimal(registry, reponses):
    reponses["parity_enode"] = ResultatRpc.succes({"active": "0x3", "connected": "0x5", "max": "0x32"})
    collector = NodeCollector(NODE_URL, registry, client=FakeClientNoeud(reponses))

    await collector.refresh()

    assert _valeur(registry, "parity_max_peers") == 50


@pytest.mark.asyncio
async def test_reponse_mal_formee_ne_modifie_aucune_jauge(registry):
    client = FakeClientNoeud(reponses_nominales())
    collector = NodeCollector(NODE_URL, registry, client=client)
    await collector.refresh()
    avant = etat_registre(registry)

    client.reponses["web3_clientVersion"] = ResultatRpc.succes("Parity/v3.0.0")
    client.reponses["parity_enode"] = ResultatRpc.succes({"active": 3, "connected": 5})
    await collector.refresh()

    assert etat_registre(registry) == avant


@pytest.mark.asyncio
async def test_bloc_hexadecimal_invalide_est_absorbe(registry, reponses):
    reponses["eth_blockNumber"] = ResultatRpc.succes("pas-un-nombre")
    collector = NodeCollector(NODE_URL, registry, client=FakeClientNoeud(reponses))

    await collector.refresh()

    assert _valeur(registry, "parity_up") == 0
    sante = await collector.verifier_sante()
    assert "eth_blockNumber" in sante.details["derniere_erreur"]


@pytest.mark.asyncio
async def test_exception_transport_ne_remonte_pas(registry, reponses, caplog):
    reponses["eth_syncing"] = RuntimeError("socket ferme")
    collector = NodeCollector(NODE_URL, registry, client=FakeClientNoeud(reponses))

    await collector.refresh()

    assert _valeur(registry, "parity_up") == 0
    assert "socket ferme" in caplog.text


@pytest.mark.asyncio
async def test_refresh_concurrent_ignore(registry):
    client = ClientBloque(reponses_nominales())
    collector = NodeCollector(NODE_URL, registry, client=client)

    premier = asyncio.create_task(collector.refresh())
    await asyncio.sleep(0)
    await collector.refresh()
    client.barriere.set()
    await premier

    assert len(client.en_attente) == 4
    assert len(client.appels) == 4
    assert _valeur(registry, "parity_up") == 1


@pytest.mark.asyncio
async def test_les_quatre_appels_sont_lances_en_parallele(registry):
    client = ClientBloque(reponses_nominales())
    collector = NodeCollector(NODE_URL, registry, client=client)

    tache = asyncio.create_task(collector.refresh())
    for _ in range(10):
        await asyncio.sleep(0)

    assert sorted(client.en_attente) == sorted(
        ["web3_clientVersion", "eth_syncing", "eth_blockNumber", "parity_enode"]
    )
    assert client.appels == []
    assert _valeur(registry, "parity_up") == 0

    client.barriere.set()
    await asyncio.wait_for(tache, timeout=1)

    assert _valeur(registry, "parity_up") == 1
    assert _valeur(registry, "parity_current_block") == 100
    assert _valeur(registry, "parity_connected_peers") == 5


@pytest.mark.asyncio
@pytest.mark.parametrize("methode", ["eth_blockNumber", "parity_enode"])
async def test_appel_obligatoire_en_echec_ne_modifie_aucune_jauge(registry, methode):
    client = FakeClientNoeud(reponses_nominales())
    collector = NodeCollector(NODE_URL, registry, client=client)
    await collector.refresh()
    avant = etat_registre(registry)

    client.reponses["web3_clientVersion"] = ResultatRpc.succes("Parity/v3.0.0")
    client.reponses["eth_blockNumber"] = ResultatRpc.succes("0xc8")
    client.reponses[methode] = ResultatRpc.echec("connexion reinitialisee")
    await collector.refresh()

    assert etat_registre(registry) == avant
    assert _valeur(registry, "parity_up") == 1
    sante = await collector.verifier_sante()
    assert sante.details["derniere_erreur"] == f"{methode}: connexion reinitialisee"


@pytest.mark.asyncio
async def test_verifier_sante(registry, fake_client):
    collector = NodeCollector(NODE_URL, registry, client=fake_client)

    initial = await collector.verifier_sante()
    assert initial.sain is False
    assert initial.details["up"] is None

    await collector.refresh()
    sante = await collector.verifier_sante()
    assert sante.sain is True
    assert sante.details["node_url"] == NODE_URL
    assert sante.details["derniere_collecte"] is not None


@pytest.mark.asyncio
async def test_create_metrics_renvoie_refresh_lie(registry, fake_client):
    refresh = create_metrics(registry, NODE_URL, client=fake_client)

    await refresh()

    assert _valeur(registry, "parity_current_block") == 100


def test_prefixe_configurable(registry, fake_client):
    NodeCollector(NODE_URL, registry, client=fake_client, prefix="openethereum")

    assert registry.get_sample_value("openethereum_up") == 0
