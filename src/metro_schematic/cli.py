"""CLI for metro-schematic."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from metro_schematic import __version__
from metro_schematic.layout import compute_layout
from metro_schematic.layout.constants import DEFAULT_CELL_SIZE, TRANSFER_THRESHOLD
from metro_schematic.layout.graph import NetworkGraph
from metro_schematic.network.loader import (
    NetworkFormatError,
    build_graph,
    load_network,
)
from metro_schematic.network.model import Network
from metro_schematic.render import render_svg
from metro_schematic.themes import THEMES


def _load(input_file: Path) -> Network:
    try:
        return load_network(input_file)
    except NetworkFormatError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)


def _layout_options(f):
    f = click.option("--mode", type=click.Choice(["1d", "2d"]), default="1d",
                     help="Linear (1d) or grid (2d) diagram (default: 1d)")(f)
    f = click.option("--cell-size", type=float, default=DEFAULT_CELL_SIZE,
                     help=f"Grid cell size in projected meters for 2d "
                          f"(default: {DEFAULT_CELL_SIZE:g})")(f)
    f = click.option("--transfer-threshold", type=float, default=TRANSFER_THRESHOLD,
                     help=f"Longest walk transfer merged into one vertex "
                          f"(default: {TRANSFER_THRESHOLD:g})")(f)
    f = click.option("--no-collapse", is_flag=True, default=False,
                     help="Keep short walk transfers as separate vertices")(f)
    return f


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", count=True,
              help="Increase log verbosity (-v info, -vv debug)")
def cli(verbose: int) -> None:
    """metro-schematic: Lay out transit networks as schematic line diagrams."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <input>.svg")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="dark",
              help="Visual theme (default: dark)")
@_layout_options
def render(
    input_file: Path,
    output: Path | None,
    theme: str,
    mode: str,
    cell_size: float,
    transfer_threshold: float,
    no_collapse: bool,
) -> None:
    """Lay out a network file and render it to SVG."""
    network = _load(input_file)
    graph = build_graph(network)
    compute_layout(graph, mode=mode, cell_size=cell_size,
                   collapse=not no_collapse,
                   transfer_threshold=transfer_threshold)

    svg = render_svg(graph, list(network.patterns.values()), THEMES[theme],
                     mode=mode, title=network.title)

    if output is None:
        output = input_file.with_suffix(".svg")

    output.write_text(svg)
    click.echo(f"Rendered {len(graph.vertices)} vertices, "
               f"{len(graph.edges)} edges, "
               f"{len(network.patterns)} patterns -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output JSON file path. Defaults to stdout")
@_layout_options
def layout(
    input_file: Path,
    output: Path | None,
    mode: str,
    cell_size: float,
    transfer_threshold: float,
    no_collapse: bool,
) -> None:
    """Lay out a network file and export coordinates and offsets as JSON."""
    network = _load(input_file)
    graph = build_graph(network)
    result = compute_layout(graph, mode=mode, cell_size=cell_size,
                            collapse=not no_collapse,
                            transfer_threshold=transfer_threshold)

    text = json.dumps(_export(graph, network, result.mode), indent=2)
    if output is None:
        click.echo(text)
    else:
        output.write_text(text)
        click.echo(f"Wrote layout of {len(graph.vertices)} vertices -> {output}")


def _export(graph: NetworkGraph, network: Network, mode: str) -> dict:
    patterns = []
    for pattern in network.patterns.values():
        entry = {"id": pattern.id, "edges": [e.id for e in pattern.graph_edges]}
        if mode == "1d":
            entry["offsets"] = {
                str(e.id): off for e, off in pattern.edge_offsets.items()
            }
        else:
            offsets = {}
            for edge in pattern.graph_edges:
                for segment in edge.render_segments:
                    if segment.pattern is pattern:
                        for (axis, coord), off in segment.axis_offsets.items():
                            offsets[f"{axis}_{coord:g}"] = off
            entry["offsets"] = offsets
        patterns.append(entry)

    return {
        "mode": mode,
        "cell_size": graph.cell_size,
        "vertices": [
            {"id": v.id, "point": getattr(v.point, "id", None), "x": v.x, "y": v.y}
            for v in graph.vertices
        ],
        "edges": [
            {
                "id": e.id,
                "from": e.from_vertex.id,
                "to": e.to_vertex.id,
                "stops": [getattr(s, "id", None) for s in e.stop_array],
                "points": [list(p) for p in e.render_points],
            }
            for e in graph.edges
        ],
        "patterns": patterns,
    }


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def validate(input_file: Path) -> None:
    """Validate a network file."""
    network = _load(input_file)
    graph = build_graph(network)

    warnings = []
    components = graph.connected_components()
    if components > 1:
        warnings.append(f"Network has {components} disconnected components")
    if not graph.is_branch_acyclic():
        warnings.append("Network contains cycles; 1d layout will skip "
                        "the branches that close them")
    for pattern in network.patterns.values():
        if not pattern.graph_edges:
            warnings.append(f"Pattern '{pattern.id}' has no edges")

    for warning in warnings:
        click.echo(f"  - {warning}", err=True)

    click.echo(f"Valid: {len(network.stops)} stops, "
               f"{len(network.patterns)} patterns, "
               f"{len(network.transfers)} transfers")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Show information about a network file."""
    network = _load(input_file)
    graph = build_graph(network)

    click.echo(f"Title: {network.title or '(none)'}")
    click.echo(f"Stops: {len(network.stops)}")
    click.echo(f"Patterns: {len(network.patterns)}")
    for pattern in network.patterns.values():
        click.echo(f"  {pattern.name} ({pattern.color}): "
                   f"{len(pattern.stop_ids)} stops")
    click.echo(f"Transfers: {len(network.transfers)}")
    click.echo(f"Graph: {len(graph.vertices)} vertices, {len(graph.edges)} edges")
