import json
from pathlib import Path
from typing import Optional, Union
from ..core.classifier import classify
from ..core.config import CASES_DIR
from ..core.models import Label
from ..core.signals import load_signal_config

REPORT_PATH = Path("replay_report.md")


def load_cases(cases_dir: Union[str, Path] = CASES_DIR) -> list[dict]:
    cases = []
    for cf in sorted(Path(cases_dir).glob("*.json")):
        with open(cf, encoding="utf-8") as f:
            cases.append(json.load(f))
    return cases


def replay_one(case: dict, signals_path: Optional[Union[str, Path]] = None) -> dict:
    config = load_signal_config(signals_path)
    message = case["input"].get("message", "")
    expected = case["expected"]["label"]

    result = classify(message, config)
    predicted = result.label.value

    return {
        "case_id": case["case_id"],
        "input": message,
        "expected": expected,
        "predicted": predicted,
        "net_score": result.scores.net_score,
        "reasons": list(result.reasons.for_label(result.label)),
        "match": predicted == expected,
    }


def calculate_metrics(all_results: list) -> dict:
    total = len(all_results)
    correct = sum(1 for r in all_results if r["match"])
    # false_high: alerted on a lead that should have stayed quiet
    false_high = sum(
        1 for r in all_results
        if not r["match"] and r["predicted"] == Label.HIGH.value
    )
    false_low = total - correct - false_high

    return {
        "total": total,
        "correct": correct,
        "accuracy": correct / total if total > 0 else 0,
        "false_high": false_high,
        "false_low": false_low,
    }


def write_report(all_results: list, metrics: dict, signals_label: str, path: Path = REPORT_PATH) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write("# Replay Report\n\n")
        f.write(f"**Signals:** {signals_label}\n\n")
        f.write("## Metrics\n\n")
        f.write(f"- Total: {metrics['total']}\n")
        f.write(f"- Correct: {metrics['correct']}\n")
        f.write(f"- Accuracy: {metrics['accuracy']:.2%}\n")
        f.write(f"- False HIGH: {metrics['false_high']}\n")
        f.write(f"- False LOW: {metrics['false_low']}\n\n")

        f.write("## Case Results\n\n")
        for r in all_results:
            status = "✓" if r["match"] else "✗"
            f.write(f"- {status} **{r['case_id']}**: \"{r['input']}\"\n")
            f.write(f"  - Expected: {r['expected']}, Got: {r['predicted']} (net {r['net_score']})\n")
            if r["reasons"]:
                f.write(f"  - Reasons: {', '.join(r['reasons'])}\n")


def main():
    all_results = [replay_one(case) for case in load_cases()]
    metrics = calculate_metrics(all_results)
    write_report(all_results, metrics, "config/signals.yaml")
    print(f"Report saved to {REPORT_PATH}")


if __name__ == "__main__":
    main()
