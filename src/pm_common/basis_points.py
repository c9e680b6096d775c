"""Integer basis-point arithmetic for pricing, fees and payouts.

All amounts are int (smallest asset unit), all rates int basis points.
No float, no Decimal. Every division truncates toward zero, so rounding
residue always stays with the pool.
"""

BPS_DENOMINATOR = 10_000

# Reserves are unsigned 64-bit in the wire contract; k is held at double width.
MAX_AMOUNT = (1 << 64) - 1


def apply_bps(amount: int, rate_bps: int) -> int:
    """Truncating share of amount: amount * rate_bps // 10000."""
    if amount == 0 or rate_bps == 0:
        return 0
    return amount * rate_bps // BPS_DENOMINATOR


def bps_to_display(rate_bps: int) -> str:
    """Convert bps to a percentage string: 5000 -> '50.00%', 30 -> '0.30%'."""
    return f"{rate_bps // 100}.{rate_bps % 100:02d}%"
