"""Run the evaluation scenarios end to end through a throwaway WardrobeApp."""

from __future__ import annotations

from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Any, Callable, Dict, List

from evaluation.scenarios import EvaluationScenario, SCENARIOS
from models.wardrobe_item import from_raw_metadata
from tools.weather_provider import MockWeatherProvider
from wardrobe_app.app import WardrobeApp
from wardrobe_app.config import AppConfig

Suggestions = List[Dict[str, Any]]


def _top(outfits: Suggestions) -> Dict[str, Any]:
    return outfits[0] if outfits else {"item_ids": [], "reason": ""}


# Each optional expectation maps to a predicate over (expected value, ranked suggestions).
_OPTIONAL_CHECKS: Dict[str, Callable[[Any, Suggestions], bool]] = {
    "max_outfits": lambda limit, outfits: len(outfits) <= int(limit),
    "top_contains": lambda ids, outfits: set(ids).issubset(_top(outfits)["item_ids"]),
    "reason_contains": lambda text, outfits: str(text) in _top(outfits)["reason"],
}


def _evaluate_expectations(expectations: Dict[str, object], outfits: Suggestions) -> Dict[str, object]:
    scores = [float(outfit["score"]) for outfit in outfits]
    checks: Dict[str, bool] = {
        "min_outfits": len(outfits) >= int(expectations.get("min_outfits", 1)),
        "sorted_by_score": scores == sorted(scores, reverse=True),
        "scores_in_range": all(0.0 <= score <= 1.0 for score in scores),
    }
    for name, check in _OPTIONAL_CHECKS.items():
        if expectations.get(name) is not None:
            checks[name] = check(expectations[name], outfits)
    return {"passed": all(checks.values()), "checks": checks}


def run_scenario(scenario: EvaluationScenario, user_id: str = "eval_user") -> Dict[str, object]:
    with TemporaryDirectory() as tmpdir:
        app = WardrobeApp(
            AppConfig(
                database_path=str(Path(tmpdir) / "wardrobe.db"),
                profile_dir=str(Path(tmpdir) / "profiles"),
            ),
            weather_provider=MockWeatherProvider(scenario.weather),
        )
        for raw_item in scenario.wardrobe_items:
            app.wardrobe_store.create_item(from_raw_metadata({**raw_item, "user_id": user_id}))

        response = app.suggest_outfits(
            user_id=user_id,
            payload={"occasion": scenario.occasion, "location": scenario.location, "seed": scenario.seed},
        )

    outfits = response["suggestions"]
    evaluation = _evaluate_expectations(scenario.expectations, outfits)
    return {
        "scenario": scenario.name,
        "passed": evaluation["passed"],
        "checks": evaluation["checks"],
        "outfit_count": len(outfits),
        "response": response,
    }


def run_evaluation_suite() -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in SCENARIOS]


def run_smoke_checks() -> List[str]:
    return [f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}" for result in run_evaluation_suite()]


__all__ = ["run_evaluation_suite", "run_scenario", "run_smoke_checks"]
