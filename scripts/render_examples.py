#!/usr/bin/env python3
"""Batch render the example networks to SVG in both layout modes.

Outputs go to /tmp/metro_schematic_renders/.

Usage:
    python scripts/render_examples.py [--theme light]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from metro_schematic.layout.engine import compute_layout  # noqa: E402
from metro_schematic.network.loader import build_graph, load_network  # noqa: E402
from metro_schematic.render.svg import render_svg  # noqa: E402
from metro_schematic.themes import THEMES  # noqa: E402

OUTPUT_DIR = Path("/tmp/metro_schematic_renders")
EXAMPLES_DIR = project_root / "examples"
MODES = ("1d", "2d")


def render_file(
    json_path: Path, output_dir: Path, mode: str, theme_name: str
) -> tuple[str, list[str]]:
    """Load, lay out, and render a network file to SVG.

    Returns (name, list_of_issues).
    """
    name = f"{json_path.stem}_{mode}"

    try:
        network = load_network(json_path)
        graph = build_graph(network)
    except Exception as e:
        return name, [f"LOAD ERROR: {e}"]

    issues: list[str] = []
    if mode == "1d" and not graph.is_branch_acyclic():
        issues.append("network has cycles; some branches are skipped")

    try:
        compute_layout(graph, mode=mode)
    except Exception as e:
        return name, [f"LAYOUT ERROR: {e}"]

    try:
        svg_str = render_svg(
            graph,
            list(network.patterns.values()),
            THEMES[theme_name],
            mode=mode,
            title=network.title,
        )
    except Exception as e:
        return name, [f"RENDER ERROR: {e}"]

    (output_dir / f"{name}.svg").write_text(svg_str)
    return name, issues


def main():
    parser = argparse.ArgumentParser(description="Batch render example networks")
    parser.add_argument("--theme", choices=sorted(THEMES), default="dark")
    args = parser.parse_args()

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    files = sorted(EXAMPLES_DIR.glob("*.json"))
    print(f"Rendering {len(files)} files to {OUTPUT_DIR}/")
    print()

    any_errors = False
    for json_path in files:
        for mode in MODES:
            name, issues = render_file(json_path, OUTPUT_DIR, mode, args.theme)
            status = "OK" if not issues else "ISSUES"
            if any("ERROR" in i for i in issues):
                status = "FAIL"
                any_errors = True

            print(f"  {name:<24}  [{status}]")
            for issue in issues:
                print(f"    - {issue}")

    print(f"\nOutputs in: {OUTPUT_DIR}/")

    if any_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
