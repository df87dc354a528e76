"""rario/scenarios.py — Scripted runs of a stage with a pass/fail goal.

A scenario file names a stage, an agent and a frame budget, plus one goal:

    name: jump_over_first_pipe
    stage: world1-1
    agent: jump_runner
    frames: 1200
    goal: {reach_x: 500}        # or {scroll_to: 100}, or {survive: true}
    fail_on: [fall, stall]
    stall: {frames: 240, tolerance: 2.0}
    start: {x: 40, y: 184}      # optional screen position override

Usage::

    rario-scenarios scenarios/walk_to_first_pipe.yaml
    rario-scenarios --all --agent jump_runner -o results.json --history
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path

import yaml

from rario.agents import make_agent
from rario.controls import action_input
from rario.debug import DEBUG
from rario.observation import extract_observation
from rario.simulation import (
    BounceEvent,
    JumpEvent,
    LandedEvent,
    SimState,
    create_sim,
    sim_step,
)

log = logging.getLogger(__name__)

SCENARIOS_DIR = Path("scenarios")

GOAL_KINDS = ("reach_x", "scroll_to", "survive")
FAILURE_KINDS = ("fall", "stall")


class ScenarioError(ValueError):
    """A scenario file is missing a field or names an unknown goal."""


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Goal:
    kind: str
    value: float = 0.0

    def met(self, sim: SimState) -> bool:
        if self.kind == "reach_x":
            return sim.player_world_x >= self.value
        if self.kind == "scroll_to":
            return sim.camera.x_back >= self.value
        # survive is only decided when the frame budget runs out
        return False


@dataclass
class Scenario:
    name: str
    stage: str
    agent: str
    frames: int
    goal: Goal
    fail_on: tuple[str, ...] = ("fall",)
    stall_frames: int = 120
    stall_tolerance: float = 2.0
    agent_params: dict = field(default_factory=dict)
    start: tuple[float, float] | None = None
    description: str = ""


@dataclass
class Sample:
    frame: int
    world_x: float
    y: float
    vx: float
    vy: float
    x_back: float
    grounded: bool
    action: int


@dataclass
class RunResult:
    name: str
    passed: bool
    reason: str
    frames: int
    world_x: float
    max_x: float
    x_back: float
    jumps: int = 0
    bounces: int = 0
    landings: int = 0
    time_on_ground: float = 0.0
    stalled_at: float | None = None
    history: list[Sample] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _require(data: dict, key: str, source: str):
    if key not in data:
        raise ScenarioError(f"{source}: missing required field {key!r}")
    return data[key]


def _parse_goal(raw, source: str) -> Goal:
    if not isinstance(raw, dict) or len(raw) != 1:
        raise ScenarioError(f"{source}: goal must be a single-key mapping, one of {GOAL_KINDS}")
    (kind, value), = raw.items()
    if kind not in GOAL_KINDS:
        raise ScenarioError(f"{source}: unknown goal {kind!r}, expected one of {GOAL_KINDS}")
    if kind == "survive":
        return Goal("survive")
    return Goal(kind, float(value))


def parse_scenario(data: dict, source: str = "<scenario>") -> Scenario:
    """Build a Scenario from a parsed YAML mapping.

    Raises:
        ScenarioError: On missing fields, unknown goals or unknown failure kinds.
    """
    if not isinstance(data, dict):
        raise ScenarioError(f"{source}: expected a mapping at the top level")

    fail_on = tuple(data.get("fail_on", ["fall"]))
    for kind in fail_on:
        if kind not in FAILURE_KINDS:
            raise ScenarioError(f"{source}: unknown fail_on entry {kind!r}, expected {FAILURE_KINDS}")

    stall = data.get("stall") or {}
    start = data.get("start")

    return Scenario(
        name=_require(data, "name", source),
        stage=_require(data, "stage", source),
        agent=_require(data, "agent", source),
        frames=int(_require(data, "frames", source)),
        goal=_parse_goal(_require(data, "goal", source), source),
        fail_on=fail_on,
        stall_frames=int(stall.get("frames", 120)),
        stall_tolerance=float(stall.get("tolerance", 2.0)),
        agent_params=data.get("agent_params") or {},
        start=(float(start["x"]), float(start["y"])) if start else None,
        description=data.get("description", ""),
    )


def load_scenario(path: Path) -> Scenario:
    with open(path) as f:
        data = yaml.safe_load(f)
    return parse_scenario(data, source=str(path))


def discover(base: Path = SCENARIOS_DIR) -> list[Path]:
    """Every *.yaml under base, sorted by path."""
    return sorted(base.rglob("*.yaml"))


# ---------------------------------------------------------------------------
# Running
# ---------------------------------------------------------------------------

def _stalled(history: list[Sample], frames: int, tolerance: float) -> bool:
    if frames <= 0 or len(history) < frames:
        return False
    xs = [s.world_x for s in history[-frames:]]
    return max(xs) - min(xs) < tolerance


def run_scenario(scenario: Scenario, keep_history: bool = True) -> RunResult:
    """Drive the stage with the scenario's agent until the goal or a failure."""
    sim = create_sim(scenario.stage)
    if scenario.start is not None:
        sim.player.x, sim.player.y = scenario.start
        sim.max_x_reached = sim.player_world_x

    agent = make_agent(scenario.agent, scenario.agent_params)
    agent.reset()

    history: list[Sample] = []
    counts = {JumpEvent: 0, BounceEvent: 0, LandedEvent: 0}
    grounded_frames = 0
    passed: bool | None = None
    reason = ""

    for frame in range(scenario.frames):
        action = int(agent.act(extract_observation(sim)))
        for event in sim_step(sim, action_input(action)):
            if type(event) in counts:
                counts[type(event)] += 1
        grounded_frames += sim.player_grounded

        history.append(Sample(
            frame=frame,
            world_x=sim.player_world_x,
            y=sim.player.y,
            vx=sim.player.vx,
            vy=sim.player.vy,
            x_back=sim.camera.x_back,
            grounded=sim.player_grounded,
            action=action,
        ))

        if sim.player_lost and "fall" in scenario.fail_on:
            passed, reason = False, "fell"
        elif scenario.goal.met(sim):
            passed, reason = True, scenario.goal.kind
        elif "stall" in scenario.fail_on and _stalled(
            history, scenario.stall_frames, scenario.stall_tolerance
        ):
            passed, reason = False, "stalled"
        if passed is not None:
            break

    if passed is None:
        passed = scenario.goal.kind == "survive" and not sim.player_lost
        reason = "survived" if passed else "out_of_frames"

    stalled_at = None
    if reason == "stalled" or _stalled(history, scenario.stall_frames, scenario.stall_tolerance):
        stalled_at = history[-1].world_x
    log.debug("%s: %s after %d frames", scenario.name, reason, len(history))

    return RunResult(
        name=scenario.name,
        passed=passed,
        reason=reason,
        frames=len(history),
        world_x=sim.player_world_x,
        max_x=sim.max_x_reached,
        x_back=sim.camera.x_back,
        jumps=counts[JumpEvent],
        bounces=counts[BounceEvent],
        landings=counts[LandedEvent],
        time_on_ground=grounded_frames / len(history) if history else 0.0,
        stalled_at=stalled_at,
        history=history if keep_history else [],
    )


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------

_GREEN = "\033[32m"
_RED = "\033[31m"
_RESET = "\033[0m"


def report_line(result: RunResult, color: bool = False) -> str:
    verdict = "PASS" if result.passed else "FAIL"
    if color:
        verdict = f"{_GREEN if result.passed else _RED}{verdict}{_RESET}"
    line = (
        f"{verdict} {result.name} ({result.reason}) frames={result.frames} "
        f"x={result.world_x:.1f} scroll={result.x_back:.1f} "
        f"jumps={result.jumps} bounces={result.bounces}"
    )
    if result.stalled_at is not None:
        line += f" stalled_at={result.stalled_at:.1f}"
    return line


def results_to_json(results: list[RunResult], history: bool = False) -> str:
    rows = []
    for result in results:
        row = asdict(result)
        if not history:
            del row["history"]
        rows.append(row)
    passed = sum(r.passed for r in results)
    return json.dumps(
        {"passed": passed, "failed": len(results) - passed, "results": rows},
        indent=2,
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    """Run scenario files and exit 0 only when every one passes."""
    parser = argparse.ArgumentParser(description="Run Rario scenarios")
    parser.add_argument("paths", nargs="*", type=Path, help="Scenario YAML files")
    parser.add_argument("--all", action="store_true", help="Run every file under scenarios/")
    parser.add_argument("--agent", help="Replace each scenario's agent")
    parser.add_argument("-o", "--json", type=Path, help="Write results as JSON to this path")
    parser.add_argument("--history", action="store_true", help="Include per-frame samples in the JSON")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if DEBUG else logging.WARNING)

    paths = list(args.paths)
    if args.all:
        paths += discover()
    if not paths:
        parser.print_usage()
        sys.exit(2)

    color = sys.stdout.isatty()
    results = []
    for path in paths:
        scenario = load_scenario(path)
        if args.agent:
            scenario.agent = args.agent
            scenario.agent_params = {}
        result = run_scenario(scenario, keep_history=args.history)
        results.append(result)
        print(report_line(result, color))

    passed = sum(r.passed for r in results)
    print(f"{passed}/{len(results)} passed")

    if args.json:
        args.json.parent.mkdir(parents=True, exist_ok=True)
        args.json.write_text(results_to_json(results, history=args.history))

    sys.exit(0 if passed == len(results) else 1)


if __name__ == "__main__":
    main()
