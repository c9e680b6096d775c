"""Process-wide engine instance and its FastAPI dependency.

Markets, pools and positions live for the lifetime of the process.
"""

from config.settings import settings
from src.pm_common.id_generator import SnowflakeIdGenerator
from src.pm_engine.engine import ExchangeEngine

engine = ExchangeEngine(
    id_generator=SnowflakeIdGenerator(machine_id=settings.MACHINE_ID),
    max_total_fee_bps=settings.MAX_TOTAL_FEE_BPS,
    min_seed_amount=settings.MIN_SEED_AMOUNT,
)


def get_engine() -> ExchangeEngine:
    return engine
