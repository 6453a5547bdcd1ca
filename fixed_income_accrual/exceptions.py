class ValuationError(ValueError):
    """Base exception for all valuation engine errors."""

    def __init__(self, message="An error occurred in the valuation engine."):
        self.message = message
        super().__init__(self.message)


class InvalidInvestmentError(ValuationError):
    """Raised when an investment or benchmark rate violates the engine's input contract."""

    def __init__(self, message="Invalid investment data provided to the engine."):
        self.message = message
        super().__init__(self.message)
