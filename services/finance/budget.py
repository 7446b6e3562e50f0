from typing import Iterable


def budget_variance(lines: Iterable[dict]) -> dict:
    """Budget vs actual per line plus a totals summary.

    Each line needs `budgeted` and `actual`; other keys (account code,
    name) are carried through. Actuals are compared by magnitude, so a
    credit-side actual counts the same as a debit.
    """
    results = []
    for line in lines:
        budgeted = float(line.get("budgeted") or 0)
        actual = abs(float(line.get("actual") or 0))
        variance = budgeted - actual
        results.append({
            **line,
            "budgeted": budgeted,
            "actual": actual,
            "variance": variance,
            "variance_percent": variance / budgeted * 100 if budgeted > 0 else 0,
            "status": "under" if variance >= 0 else "over",
        })

    total_budgeted = sum(r["budgeted"] for r in results)
    total_actual = sum(r["actual"] for r in results)
    total_variance = total_budgeted - total_actual

    return {
        "summary": {
            "total_budgeted": total_budgeted,
            "total_actual": total_actual,
            "total_variance": total_variance,
            "variance_percent": total_variance / total_budgeted * 100 if total_budgeted > 0 else 0,
        },
        "line_items": results,
    }
