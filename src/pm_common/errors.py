"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/Identity
  2xxx: Custody
  3xxx: Market
  4xxx: Pool / Bet
  5xxx: Position
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/Identity ---

class UsernameExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Username already exists", 409)


class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Email already exists", 409)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid username or password", 401)


class AccountDisabledError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Account is disabled", 403)


class NotMarketCreatorError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(1006, f"Only the market creator may do this: {market_id}", 403)


# --- 2xxx: Custody ---

class InsufficientBalanceError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient balance: required {required}, available {available}",
            422,
        )


class InvalidAmountError(AppError):
    def __init__(self, amount: int) -> None:
        super().__init__(2003, f"Amount must be positive, got {amount}", 422)


# --- 3xxx: Market ---

class MarketNotFoundError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(3001, f"Market not found: {market_id}", 404)


class MarketNotOpenError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(3002, f"Market is not open: {market_id}", 422)


class MarketAlreadyClosedError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(3003, f"Market is already closed: {market_id}", 422)


class MarketNotClosedError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(3004, f"Market must be closed before resolution: {market_id}", 422)


class BeforeResolutionTimeError(AppError):
    def __init__(self, market_id: str, resolution_time_ms: int, now_ms: int) -> None:
        super().__init__(
            3005,
            f"Market {market_id} cannot resolve before {resolution_time_ms} (now {now_ms})",
            422,
        )


class MarketNotResolvedError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(3006, f"Market is not resolved: {market_id}", 422)


class InvalidMarketParamsError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3007, f"Invalid market parameters: {detail}", 422)


# --- 4xxx: Pool / Bet ---

class PoolNotFoundError(AppError):
    def __init__(self, pool_id: str) -> None:
        super().__init__(4001, f"Pool not found: {pool_id}", 404)


class PoolAlreadyExistsError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(4002, f"Market already has a pool: {market_id}", 409)


class InvalidPoolParamsError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4003, f"Invalid pool parameters: {detail}", 422)


class InvalidBetAmountError(AppError):
    def __init__(self, stake: int, min_bet: int, max_bet: int) -> None:
        super().__init__(4004, f"Stake {stake} must be in [{min_bet}, {max_bet}]", 422)


class SlippageExceededError(AppError):
    def __init__(self, drift_bps: int, max_slippage_bps: int) -> None:
        super().__init__(
            4005,
            f"Slippage exceeded: odds moved {drift_bps} bps, tolerance {max_slippage_bps} bps",
            422,
        )


class PoolExhaustedError(AppError):
    def __init__(self, pool_id: str) -> None:
        super().__init__(4006, f"Pool reserves exhausted: {pool_id}", 422)


class InsufficientLiquidityError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            4007,
            f"Pool cannot underwrite bet: liability {required}, custodied {available}",
            422,
        )


# --- 5xxx: Position ---

class PositionNotFoundError(AppError):
    def __init__(self, position_id: str) -> None:
        super().__init__(5001, f"Position not found: {position_id}", 404)


class NotPositionOwnerError(AppError):
    def __init__(self, position_id: str) -> None:
        super().__init__(5002, f"Caller does not own position {position_id}", 403)


class InvalidTransferError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(5003, f"Invalid transfer: {detail}", 422)


# --- 9xxx: System ---

class PoolInsolventError(AppError):
    """Custodied funds cannot cover a due payout. Never retryable."""

    def __init__(self, pool_id: str, payout: int, custodied: int) -> None:
        super().__init__(
            9003,
            f"Pool {pool_id} insolvent: payout {payout} exceeds custodied {custodied}",
            500,
        )
