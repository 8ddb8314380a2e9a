"""Example usage of the balance checker."""

import json
from balancecheck import BalanceChecker, CheckerConfig, ParseError

# Three balance exports for the same account
january = """
{
    "account": {"id": "ACC-001", "currency": "EUR", "balance": 1250.00},
    "entries": [
        {"type": "credit", "amount": 1000},
        {"type": "debit", "amount": 250}
    ],
    "generatedAt": "2025-01-31T23:59:59Z"
}
"""

february = """
{
    "account": {"id": "ACC-001", "currency": "EUR", "balance": 1250},
    "entries": [
        {"type": "credit", "amount": 1000},
        {"type": "debit", "amount": 250}
    ],
    "generatedAt": "2025-02-28T23:59:59Z"
}
"""

march = """
{
    "account": {"id": "ACC-001", "currency": "USD", "balance": "1250.00"},
    "entries": [
        {"type": "credit", "amount": 1000},
        {"type": "debit"}
    ],
    "generatedAt": "2025-03-31T23:59:59Z"
}
"""

checker = BalanceChecker(CheckerConfig(ignored_fields=["generatedAt"]))
checker.add_text(january, source_name="january.json")
checker.add_text(february, source_name="february.json")
checker.add_text(march, source_name="march.json")

try:
    checker.add_text('{"account": ')
except ParseError as e:
    print(e.message)

print("\nFields:")
for state in checker.field_states():
    print(f"  {'(ignored) ' if state.ignored else ''}{state.path}")

report = checker.report()
report.print_summary()

print("\nJSON report:")
print(json.dumps(report.to_dict()["summary"], indent=2))
