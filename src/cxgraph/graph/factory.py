"""Graph Factory - Shared entry point for building a NetworkGraph.

Commands and library callers should use build_graph() instead of
driving the decoder and GraphBuilder themselves.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from cxgraph.config import get_config
from cxgraph.graph.aspects import Network
from cxgraph.graph.builder import GraphBuilder, NetworkGraph
from cxgraph.graph.deserializer import NetworkFile, decode_network
from cxgraph.graph.references import NetworkDecodeError


def _to_network(source: Network | Path | str | list | dict) -> Network:
    if isinstance(source, Network):
        return source
    if isinstance(source, (str, Path)):
        networks = list(NetworkFile(source).deserialize())
        if len(networks) != 1:
            raise NetworkDecodeError(f"Expected one CX document at {source}, found {len(networks)}")
        return networks[0]
    return decode_network(source)


def build_graph(
    source: Network | Path | str | list | dict,
    config: dict[str, Any] | None = None,
    config_path: Path | None = None,
) -> NetworkGraph:
    """Build a NetworkGraph from a network, a CX file, or parsed CX JSON.

    Construction is all-or-nothing: if any pass fails the error
    propagates and no graph is returned.

    Args:
        source: A decoded Network, a path to a CX file, or the parsed
            JSON of a CX document.
        config: Pre-loaded config dict (optional).
        config_path: Path to config file (optional).

    Returns:
        The linked NetworkGraph.

    Raises:
        GraphBuildError: If decoding or linking fails.
    """
    if config is None:
        config = get_config(config_path)

    network = _to_network(source)
    builder = GraphBuilder(
        on_duplicate=config.get("graph", {}).get("on_duplicate", "overwrite"),
        source_id=network.source_id,
    )
    builder.add_network(network)
    return builder.build()


__all__ = ["build_graph"]
