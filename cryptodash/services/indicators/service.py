"""
Indicator Engine Service Implementation

Runs the full indicator suite for each timeframe of a dashboard snapshot and
turns the results into levels and alerts. Pure computation, no I/O.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from cryptodash.core.config import Settings, settings as default_settings
from cryptodash.schemas.market import Candle, DashboardSnapshot
from cryptodash.schemas.indicators import (
    CrossResult,
    DashboardAnalysis,
    TimeframeAnalysis,
)
from cryptodash.services.base import ValidationError
from cryptodash.services.formatting.precision import SymbolPrecisionCache, get_precision_cache
from cryptodash.services.indicators.interface import IndicatorServiceInterface
from cryptodash.services.indicators.series import (
    calculate_all_mas,
    calculate_bollinger_bands,
    calculate_macd,
    calculate_rsi,
    calculate_stochastic_rsi,
)
from cryptodash.services.indicators.crosses import detect_crosses
from cryptodash.services.indicators.levels import (
    find_closest_bb,
    find_closest_ma,
    get_all_technical_levels,
)
from cryptodash.services.indicators.alerts import (
    generate_technical_alerts,
    get_fear_greed_classification,
)

logger = logging.getLogger(__name__)


def normalize_candles(candles: Sequence[Candle]) -> list[Candle]:
    """Sort candles by time and keep the last candle for each timestamp."""
    by_time: dict[int, Candle] = {}
    for candle in candles:
        by_time[candle.time] = candle
    return [by_time[t] for t in sorted(by_time)]


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Calculates technical indicators for every timeframe of a symbol.
    All calculations are deterministic and reproducible.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        precision_cache: Optional[SymbolPrecisionCache] = None,
    ):
        self.config = config or default_settings
        self.precision_cache = precision_cache or get_precision_cache()

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def validate_input(self, input_data: DashboardSnapshot) -> DashboardSnapshot:
        """Reject empty snapshots; sort and de-duplicate each candle batch."""
        if not any(input_data.candles.values()):
            raise ValidationError(
                self.name,
                f"No candle data for {input_data.symbol}",
                {"timeframes": list(input_data.candles.keys())},
            )

        normalized = {}
        for timeframe, candles in input_data.candles.items():
            cleaned = normalize_candles(candles)
            if cleaned != list(candles):
                logger.warning(
                    f"{input_data.symbol} {timeframe}: reordered or de-duplicated "
                    f"candles ({len(candles)} -> {len(cleaned)})"
                )
            normalized[timeframe] = cleaned

        return input_data.model_copy(update={"candles": normalized})

    def analyze_timeframe(
        self,
        timeframe: str,
        candles: Sequence[Candle],
        current_price: Optional[float] = None,
    ) -> TimeframeAnalysis:
        """Calculate all indicators for one timeframe."""
        cfg = self.config
        price = current_price or (candles[-1].close if candles else None)

        mas = calculate_all_mas(candles, cfg.ma_periods)
        bands = calculate_bollinger_bands(candles, cfg.bb_period, cfg.bb_std_dev)

        short_ma = mas.get(cfg.cross_short_period)
        long_ma = mas.get(cfg.cross_long_period)
        crosses = (
            detect_crosses(short_ma, long_ma, cfg.sign_epsilon)
            if short_ma and long_ma
            else CrossResult()
        )

        return TimeframeAnalysis(
            timeframe=timeframe,
            candle_count=len(candles),
            moving_averages=mas,
            bollinger_bands=bands,
            rsi=calculate_rsi(candles, cfg.rsi_period),
            stoch_rsi=calculate_stochastic_rsi(
                candles,
                cfg.rsi_period,
                cfg.stoch_rsi_period,
                cfg.stoch_k_smooth,
                cfg.stoch_d_smooth,
            ),
            macd=calculate_macd(candles, cfg.macd_fast, cfg.macd_slow, cfg.macd_signal),
            crosses=crosses,
            closest_ma=find_closest_ma(price, mas),
            closest_bb=find_closest_bb(price, bands),
        )

    def _ordered_timeframes(self, snapshot: DashboardSnapshot) -> list[str]:
        """Configured timeframes first, then any extra labels in input order."""
        known = [tf for tf in self.config.timeframes if tf in snapshot.candles]
        extra = [tf for tf in snapshot.candles if tf not in known]
        return known + extra

    async def execute(self, input_data: DashboardSnapshot) -> DashboardAnalysis:
        """Analyze all timeframes, then derive levels and alerts."""
        snapshot = await self.validate_input(input_data)
        symbol = snapshot.symbol
        timeframes = self._ordered_timeframes(snapshot)

        results: dict[str, TimeframeAnalysis] = {}
        errors: list[str] = []

        for timeframe in timeframes:
            candles = snapshot.candles[timeframe]
            if candles:
                self.precision_cache.observe(symbol, candles[-1].close)
            try:
                results[timeframe] = self.analyze_timeframe(
                    timeframe, candles, snapshot.current_price
                )
            except Exception as e:
                # Log error but continue with other timeframes
                logger.exception(f"Error analyzing {symbol} {timeframe}")
                errors.append(f"{timeframe}: {e}")

        if snapshot.current_price:
            self.precision_cache.observe(symbol, snapshot.current_price)

        current_price = snapshot.current_price
        if current_price is None:
            for timeframe in timeframes:
                if snapshot.candles[timeframe]:
                    current_price = snapshot.candles[timeframe][-1].close
                    break

        alerts = generate_technical_alerts(
            symbol=symbol,
            stoch_rsi_data={tf: a.stoch_rsi for tf, a in results.items()},
            macd_data={tf: a.macd for tf, a in results.items()},
            cross_data={tf: a.crosses for tf, a in results.items()},
            fear_greed_index=snapshot.fear_greed_index,
            timeframes=list(results.keys()),
            config=self.config,
        )

        fear_greed = snapshot.fear_greed_index
        logger.info(
            f"Analyzed {symbol}: {len(results)} timeframes, {len(alerts)} alerts, "
            f"{len(errors)} errors"
        )

        return DashboardAnalysis(
            symbol=symbol,
            generated_at=datetime.now(timezone.utc),
            current_price=current_price,
            price_decimals=self.precision_cache.get(symbol),
            timeframes=results,
            technical_levels=get_all_technical_levels(
                {tf: a.moving_averages for tf, a in results.items()},
                {tf: a.bollinger_bands for tf, a in results.items()},
                timeframes=self.config.timeframes,
            ),
            fear_greed_index=fear_greed,
            fear_greed_classification=(
                get_fear_greed_classification(fear_greed) if fear_greed is not None else None
            ),
            alerts=alerts,
            errors=errors,
        )

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
