"""Seed prices and company metadata for the offline market simulator."""

# Previous-close prices for the simulated universe (as of project creation)
SEED_PRICES: dict[str, float] = {
    "AAPL": 190.00,
    "GOOGL": 175.00,
    "MSFT": 420.00,
    "AMZN": 185.00,
    "TSLA": 250.00,
    "NVDA": 800.00,
    "META": 500.00,
    "JPM": 195.00,
    "V": 280.00,
    "NFLX": 600.00,
    "AMD": 160.00,
    "INTC": 35.00,
    "CRM": 290.00,
    "ADBE": 480.00,
    "DIS": 110.00,
    "NKE": 95.00,
    "WMT": 68.00,
}

# (display name, market capitalization in USD)
COMPANIES: dict[str, tuple[str, int]] = {
    "AAPL": ("Apple Inc.", 2_950_000_000_000),
    "GOOGL": ("Alphabet Inc.", 2_170_000_000_000),
    "MSFT": ("Microsoft Corporation", 3_120_000_000_000),
    "AMZN": ("Amazon.com Inc.", 1_920_000_000_000),
    "TSLA": ("Tesla Inc.", 795_000_000_000),
    "NVDA": ("NVIDIA Corporation", 1_980_000_000_000),
    "META": ("Meta Platforms Inc.", 1_270_000_000_000),
    "JPM": ("JPMorgan Chase & Co.", 560_000_000_000),
    "V": ("Visa Inc.", 575_000_000_000),
    "NFLX": ("Netflix Inc.", 258_000_000_000),
    "AMD": ("Advanced Micro Devices Inc.", 259_000_000_000),
    "INTC": ("Intel Corporation", 149_000_000_000),
    "CRM": ("Salesforce Inc.", 281_000_000_000),
    "ADBE": ("Adobe Inc.", 215_000_000_000),
    "DIS": ("The Walt Disney Company", 201_000_000_000),
    "NKE": ("Nike Inc.", 143_000_000_000),
    "WMT": ("Walmart Inc.", 548_000_000_000),
}

# Per-ticker GBM parameters
# sigma: annualized volatility (higher = more price movement)
# mu: annualized drift / expected return
TICKER_PARAMS: dict[str, dict[str, float]] = {
    "AAPL": {"sigma": 0.22, "mu": 0.05},
    "GOOGL": {"sigma": 0.25, "mu": 0.05},
    "MSFT": {"sigma": 0.20, "mu": 0.05},
    "AMZN": {"sigma": 0.28, "mu": 0.05},
    "TSLA": {"sigma": 0.50, "mu": 0.03},  # High volatility
    "NVDA": {"sigma": 0.40, "mu": 0.08},  # High volatility, strong drift
    "META": {"sigma": 0.30, "mu": 0.05},
    "JPM": {"sigma": 0.18, "mu": 0.04},  # Low volatility (bank)
    "V": {"sigma": 0.17, "mu": 0.04},  # Low volatility (payments)
    "NFLX": {"sigma": 0.35, "mu": 0.05},
}

# Default parameters for tickers not in the list above
DEFAULT_PARAMS: dict[str, float] = {"sigma": 0.25, "mu": 0.05}

# Daily share volume baseline; each quote draws around this
DEFAULT_DAILY_VOLUME = 20_000_000
