#!/usr/bin/env python3
"""Run the force layout headless and dump node positions.

Useful for inspecting how a memory set settles without opening the viewer:

    uv run python scripts/compute_layout.py memories.json --steps 600 -o layout.json
"""

import argparse
import json
import random
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kgview.graph.builder import GraphBuilder
from kgview.layout.physics import PhysicsSimulator
from kgview.models import MemoryItem


def main() -> None:
    parser = argparse.ArgumentParser(description="Compute a force-directed layout for memory items")
    parser.add_argument("items", type=Path, help="JSON file with memory items")
    parser.add_argument("-n", "--steps", type=int, default=600, help="Simulation steps (default: 600)")
    parser.add_argument("--width", type=float, default=800.0, help="Stage width (default: 800)")
    parser.add_argument("--height", type=float, default=600.0, help="Stage height (default: 600)")
    parser.add_argument("--seed", type=int, default=42, help="Seed for initial positions (default: 42)")
    parser.add_argument("-o", "--output", type=Path, help="Write positions here instead of stdout")
    args = parser.parse_args()

    data = json.loads(args.items.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("items", [])
    items = [MemoryItem.from_dict(entry) for entry in data]

    graph = GraphBuilder(rng=random.Random(args.seed)).build(items)
    print(f"Graph: {len(graph.nodes)} nodes, {len(graph.edges)} edges", file=sys.stderr)

    simulator = PhysicsSimulator()
    energy = 0.0
    for i in range(args.steps):
        energy = simulator.step(graph, args.width, args.height)
        if (i + 1) % 100 == 0:
            print(f"  step {i + 1}/{args.steps}: energy={energy:.4f}", file=sys.stderr)

    layout = {
        "steps": args.steps,
        "energy": energy,
        "nodes": [
            {"id": n.id, "kind": n.kind.value, "label": n.label, "x": n.x, "y": n.y}
            for n in graph.nodes
        ],
        "edges": [{"source": e.source, "target": e.target} for e in graph.edges],
    }

    output = json.dumps(layout, indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Layout written to {args.output}", file=sys.stderr)
    else:
        print(output)


if __name__ == "__main__":
    main()
