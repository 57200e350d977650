"""CLI client for the Harbor Finance API: posts a boat loan and prints a terminal report.

Usage:
    python loan-calculator/calculate_loan.py 100000 --down 20000 --rate 6.5 --term 240
    python loan-calculator/calculate_loan.py 85000 --down 15000 --rate 7.25 --term 180 --schedule
    python loan-calculator/calculate_loan.py 85000 --down 15000 --term 180 --compare-rate 5.5 --compare-rate 8
"""

import argparse
import asyncio
import sys
from decimal import Decimal

import httpx


# ── Helpers ──────────────────────────────────────────────────────────────────

def _dollar(v) -> str:
    return f"${float(v):,.2f}"


def _pct(v) -> str:
    return f"{float(v):.2f}%"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_loan_summary(calc: dict) -> None:
    _header("Loan Summary")
    print(f"  Boat Price:       {_dollar(calc['boatPrice'])}")
    print(f"  Down Payment:     {_dollar(calc['downPayment'])}")
    print(f"  Loan Amount:      {_dollar(calc['loanAmount'])}")
    print(f"  Interest Rate:    {_pct(calc['interestRate'])}")
    print(f"  Term:             {calc['termMonths']} months")
    print()
    print(f"  Monthly Payment:  {_dollar(calc['monthlyPayment'])}")
    print(f"  Total Interest:   {_dollar(calc['totalInterest'])}")
    print(f"  Total Cost:       {_dollar(calc['totalCost'])}")


def print_schedule(calc: dict, max_rows: int) -> None:
    rows = calc.get("paymentSchedule") or []
    if not rows:
        return
    _header("Payment Schedule")
    print(f"  {'#':>4}  {'Date':<10}  {'Principal':>12}  {'Interest':>12}  {'Balance':>14}")
    print(f"  {'-' * 4}  {'-' * 10}  {'-' * 12}  {'-' * 12}  {'-' * 14}")
    for row in rows[:max_rows]:
        print(
            f"  {row['paymentNumber']:>4}  {row['paymentDate']:<10}  "
            f"{_dollar(row['principalAmount']):>12}  {_dollar(row['interestAmount']):>12}  "
            f"{_dollar(row['remainingBalance']):>14}"
        )
    if len(rows) > max_rows:
        print(f"  ... {len(rows) - max_rows} more payments")


def print_scenarios(data: dict) -> None:
    scenarios = data.get("scenarios", [])
    if not scenarios:
        return
    _header("Scenario Comparison")
    print(f"  {'Scenario':<12}  {'Rate':>7}  {'Term':>5}  {'Payment':>12}  {'Interest':>14}")
    for s in scenarios:
        r = s.get("result")
        if r is None:
            print(f"  {s['name']:<12}  {s.get('error', 'failed')}")
            continue
        print(
            f"  {s['name']:<12}  {_pct(r['interestRate']):>7}  {r['termMonths']:>5}  "
            f"{_dollar(r['monthlyPayment']):>12}  {_dollar(r['totalInterest']):>14}"
        )


def print_suggested_rates(data: dict) -> None:
    rates = data.get("suggestedRates", [])
    if not rates:
        return
    _header("Suggested Rates")
    print("  " + "  ".join(_pct(r) for r in rates))


def _fail(resp: httpx.Response) -> None:
    print(f"Error: API returned {resp.status_code}", file=sys.stderr)
    try:
        detail = resp.json().get("error", {}).get("message", resp.text)
    except ValueError:
        detail = resp.text
    print(f"  {detail}", file=sys.stderr)
    sys.exit(1)


# ── Main ─────────────────────────────────────────────────────────────────────

async def main() -> None:
    parser = argparse.ArgumentParser(description="Calculate a boat loan via the Harbor Finance API")
    parser.add_argument("price", type=Decimal, help="Boat price")
    parser.add_argument("--down", type=Decimal, default=Decimal("0"), help="Down payment (default: 0)")
    parser.add_argument("--rate", type=Decimal, help="Annual interest rate in percent (default: suggested)")
    parser.add_argument("--term", type=int, default=180, help="Term in months (default: 180)")
    parser.add_argument("--schedule", action="store_true", help="Print the payment schedule")
    parser.add_argument("--rows", type=int, default=24, help="Schedule rows to print (default: 24)")
    parser.add_argument(
        "--compare-rate", type=Decimal, action="append", default=[],
        help="Add a comparison scenario at this rate (repeatable)",
    )
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )

    args = parser.parse_args()
    loan_amount = args.price - args.down

    async with httpx.AsyncClient(base_url=args.api_url, timeout=30) as client:
        try:
            resp = await client.get(
                "/finance/rates/suggested",
                params={"loanAmount": str(loan_amount), "termMonths": args.term},
            )
            if resp.status_code != 200:
                _fail(resp)
            rates_data = resp.json()

            rate = args.rate if args.rate is not None else Decimal(str(rates_data["suggestedRates"][1]))
            payload = {
                "boatPrice": str(args.price),
                "downPayment": str(args.down),
                "interestRate": str(rate),
                "termMonths": args.term,
                "includeSchedule": args.schedule,
            }
            resp = await client.post("/finance/calculate", json=payload)
            if resp.status_code != 200:
                _fail(resp)
            calc = resp.json()["calculation"]

            scenarios_data = {}
            if args.compare_rate:
                resp = await client.post("/finance/calculate/scenarios", json={
                    "baseParams": payload,
                    "scenarios": [{"interestRate": str(r)} for r in args.compare_rate],
                })
                if resp.status_code != 200:
                    _fail(resp)
                scenarios_data = resp.json()
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn harbor_finance.api.app:app --reload", file=sys.stderr)
            sys.exit(1)

    print_loan_summary(calc)
    print_suggested_rates(rates_data)
    if args.schedule:
        print_schedule(calc, args.rows)
    print_scenarios(scenarios_data)
    print()


if __name__ == "__main__":
    asyncio.run(main())
