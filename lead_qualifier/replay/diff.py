import argparse
from pathlib import Path
from .run import calculate_metrics, load_cases, replay_one

REPORT_PATH = Path("replay_diff_report.md")


def diff_cases(cases: list, base: str, cand: str) -> tuple[list, list, list]:
    """Replay every case under both signal files; return (base, cand, changes)."""
    base_results = []
    cand_results = []
    changes = []

    for case in cases:
        base_r = replay_one(case, base)
        cand_r = replay_one(case, cand)
        base_results.append(base_r)
        cand_results.append(cand_r)

        if base_r["predicted"] != cand_r["predicted"]:
            changes.append({
                "case_id": base_r["case_id"],
                "input": base_r["input"],
                "old_label": base_r["predicted"],
                "new_label": cand_r["predicted"],
                "old_net": base_r["net_score"],
                "new_net": cand_r["net_score"],
            })

    return base_results, cand_results, changes


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compare two signal configurations over replay cases")
    parser.add_argument("--base", required=True, help="baseline signals YAML")
    parser.add_argument("--cand", required=True, help="candidate signals YAML")
    parser.add_argument("--cases", required=True, help="directory of case JSON files")
    args = parser.parse_args(argv)

    base_results, cand_results, changes = diff_cases(load_cases(args.cases), args.base, args.cand)

    base_metrics = calculate_metrics(base_results)
    cand_metrics = calculate_metrics(cand_results)
    label_change_rate = len(changes) / base_metrics["total"] if base_metrics["total"] > 0 else 0

    with open(REPORT_PATH, "w", encoding="utf-8") as f:
        f.write("# Replay Diff Report\n\n")
        f.write(f"**Base:** {args.base}\n")
        f.write(f"**Candidate:** {args.cand}\n\n")

        f.write("## Overall Metrics\n\n")
        f.write("| Metric | Base | Candidate | Delta |\n")
        f.write("|--------|------|-----------|-------|\n")
        f.write(f"| Accuracy | {base_metrics['accuracy']:.2%} | {cand_metrics['accuracy']:.2%} | {cand_metrics['accuracy'] - base_metrics['accuracy']:+.2%} |\n")
        f.write(f"| False HIGH | {base_metrics['false_high']} | {cand_metrics['false_high']} | {cand_metrics['false_high'] - base_metrics['false_high']:+d} |\n")
        f.write(f"| False LOW | {base_metrics['false_low']} | {cand_metrics['false_low']} | {cand_metrics['false_low'] - base_metrics['false_low']:+d} |\n")
        f.write(f"\n**label_change_rate:** {label_change_rate:.2%}\n\n")

        f.write("## Per-Case Changes\n\n")
        for ch in changes:
            f.write(f"- **{ch['case_id']}**: {ch['old_label']} -> {ch['new_label']} (net {ch['old_net']} -> {ch['new_net']})\n")
            f.write(f"  - Input: \"{ch['input']}\"\n")

        if not changes:
            f.write("No label changes detected.\n")

    print(f"Diff report saved to {REPORT_PATH}")


if __name__ == "__main__":
    main()
