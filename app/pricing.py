from decimal import Decimal

# Flat per-plan fees. These are NOT a rate x duration schedule:
# quarterly is not 3 x monthly and annual is not 12 x monthly.
MONTHLY_FEE = Decimal("50.00")
QUARTERLY_FEE = Decimal("135.00")
ANNUAL_FEE = Decimal("480.00")

PLAN_FEES = {
    "monthly": MONTHLY_FEE,
    "quarterly": QUARTERLY_FEE,
    "annual": ANNUAL_FEE,
}

CURRENCY_SYMBOL = "$"
