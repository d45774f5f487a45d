"""
CLI to run grid search scenarios across several strategies.

Reads scenarios/scenarios.yml, builds a SquareGrid per scenario, runs every
listed strategy to completion (or early exit at the goal) and writes one
summary row per (scenario, strategy).

scenarios/scenarios.yml is not installed with the package; running main()
without arguments needs a source checkout. Pass config_path to use any
other scenarios file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import csv
import math
import time

from graph import Graph
from graph_views import UnitCostView
from heuristics import manhattan_to
from paths import reconstruct_path
from search_engine import PriorityFirstSearchEngine
from search_types import SearchStatus, new_record_table
from square_grid import SquareGrid
from strategies import SearchStrategy, make_config

Coord = Tuple[int, int]

BUNDLED_SCENARIOS = Path(__file__).parent / "scenarios" / "scenarios.yml"

RESULT_FIELDS = [
    "scenario",
    "strategy",
    "status",
    "steps",
    "visited",
    "goal_cost",
    "path_length",
    "duration_sec",
]


@dataclass(frozen=True)
class ScenarioConfig:
    name: str
    width: int
    height: int
    starts: Sequence[Coord]
    goal: Optional[Coord] = None
    walls: Sequence[Coord] = field(default_factory=tuple)
    weights: Mapping[float, Sequence[Coord]] = field(default_factory=dict)
    strategies: Sequence[SearchStrategy] = (SearchStrategy.DIJKSTRA,)
    unweighted: bool = False
    max_steps: Optional[int] = None


@dataclass(frozen=True)
class RunnerConfig:
    scenarios: Sequence[ScenarioConfig]


def load_config(path: Path) -> RunnerConfig:
    import yaml  # type: ignore

    data = yaml.safe_load(path.read_text())
    if not isinstance(data, dict) or "scenarios" not in data:
        raise ValueError(f"{path}: expected a top-level 'scenarios' list")
    return RunnerConfig(scenarios=[_parse_scenario(raw) for raw in data["scenarios"]])


def _parse_scenario(raw: Mapping[str, object]) -> ScenarioConfig:
    for key in ("name", "width", "height"):
        if key not in raw:
            raise ValueError(f"scenario is missing required key '{key}'")
    name = str(raw["name"])

    if "starts" in raw:
        starts = [_coord(c) for c in raw["starts"]]
    elif "start" in raw:
        starts = [_coord(raw["start"])]
    else:
        raise ValueError(f"scenario '{name}' needs 'start' or 'starts'")

    goal = _coord(raw["goal"]) if raw.get("goal") is not None else None
    try:
        strategies = [SearchStrategy[s] for s in raw.get("strategies", ["DIJKSTRA"])]
    except KeyError as exc:
        raise ValueError(f"scenario '{name}' lists unknown strategy {exc}") from None
    if goal is None and any(s.needs_heuristic for s in strategies):
        raise ValueError(f"scenario '{name}' uses a heuristic strategy but has no 'goal'")

    weights = {
        float(w): [_coord(c) for c in coords]
        for w, coords in (raw.get("weights") or {}).items()
    }
    max_steps = raw.get("max_steps")
    return ScenarioConfig(
        name=name,
        width=int(raw["width"]),
        height=int(raw["height"]),
        starts=starts,
        goal=goal,
        walls=[_coord(c) for c in raw.get("walls") or []],
        weights=weights,
        strategies=strategies,
        unweighted=bool(raw.get("unweighted", False)),
        max_steps=int(max_steps) if max_steps is not None else None,
    )


def _coord(value: object) -> Coord:
    x, y = value  # type: ignore[misc]
    return int(x), int(y)


def build_grid(scenario: ScenarioConfig) -> SquareGrid:
    grid = SquareGrid(scenario.width, scenario.height)
    for weight, coords in scenario.weights.items():
        for x, y in coords:
            grid.set_weight(grid.to_id(x, y), weight)
    for x, y in scenario.walls:
        grid.set_weight(grid.to_id(x, y), math.inf)
    return grid


def run_scenario(scenario: ScenarioConfig, strategy: SearchStrategy) -> Dict[str, object]:
    start_run = time.time()
    grid = build_grid(scenario)
    graph: Graph = UnitCostView(grid) if scenario.unweighted else grid

    starts = [grid.to_id(x, y) for x, y in scenario.starts]
    goal = grid.to_id(*scenario.goal) if scenario.goal is not None else None
    heuristic = manhattan_to(grid, goal) if goal is not None else None
    config = make_config(strategy, starts, heuristic=heuristic, goal=goal)

    records = new_record_table(grid.node_count)
    state = PriorityFirstSearchEngine().search(graph, config, records, max_steps=scenario.max_steps)

    goal_cost = None
    path_length = None
    if goal is not None and records[goal].visited:
        goal_cost = records[goal].cost_so_far
        path_length = len(reconstruct_path(records, goal)) - 1

    return {
        "scenario": scenario.name,
        "strategy": strategy.value,
        "status": state.status.value,
        "steps": state.step_count,
        "visited": sum(1 for r in records if r.visited),
        "goal_cost": goal_cost,
        "path_length": path_length,
        "duration_sec": time.time() - start_run,
    }


def run_scenarios(config_path: Path, results_csv: Path | None = None) -> List[Dict[str, object]]:
    cfg = load_config(config_path)
    start = time.time()

    tasks = [(sc, strategy) for sc in cfg.scenarios for strategy in sc.strategies]
    print(f"[search] queued {len(tasks)} runs from {config_path}")

    results: List[Dict[str, object]] = []
    for scenario, strategy in tasks:
        res = run_scenario(scenario, strategy)
        results.append(res)
        print(
            f"[search] completed scenario={scenario.name} strategy={strategy.value} "
            f"status={res['status']} steps={res['steps']} goal_cost={res['goal_cost']}"
        )

    if results_csv:
        write_results_csv(results, results_csv)

    unfinished = sum(1 for r in results if r["status"] == SearchStatus.RUNNING.value)
    if unfinished:
        print(f"[search] {unfinished} runs hit max_steps before finishing")
    print(f"[search] completed {len(results)} runs in {time.time() - start:.2f}s")
    return results


def write_results_csv(results: Iterable[Mapping[str, object]], path: Path) -> None:
    """
    Write per-run results to CSV for downstream analysis.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=RESULT_FIELDS)
        writer.writeheader()
        for res in results:
            writer.writerow({key: res.get(key) for key in RESULT_FIELDS})


def main(config_path: Optional[Path] = None, results_csv: Optional[Path] = None) -> None:
    # Bundled defaults live beside this file, i.e. in a source checkout only
    config_path = config_path or BUNDLED_SCENARIOS
    results_csv = results_csv or Path(__file__).parent / "scenarios" / "results" / "runs.csv"

    results = run_scenarios(config_path, results_csv=results_csv)
    for res in results:
        print(res)
    print(f"Wrote runs to {results_csv}")


if __name__ == "__main__":
    main()
