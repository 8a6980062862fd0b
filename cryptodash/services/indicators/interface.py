"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from typing import Optional, Sequence

from cryptodash.services.base import BaseService
from cryptodash.schemas.market import Candle, DashboardSnapshot
from cryptodash.schemas.indicators import DashboardAnalysis, TimeframeAnalysis


class IndicatorServiceInterface(BaseService[DashboardSnapshot, DashboardAnalysis]):
    """
    Indicator Engine Service Contract.

    INPUT: DashboardSnapshot
        - symbol, optional live price and Fear & Greed value
        - candles per timeframe

    OUTPUT: DashboardAnalysis
        - TimeframeAnalysis per timeframe
        - technical levels, sentiment label and alerts
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: DashboardSnapshot) -> DashboardAnalysis:
        """Analyze every timeframe in the snapshot and generate alerts."""
        pass

    @abstractmethod
    def analyze_timeframe(
        self,
        timeframe: str,
        candles: Sequence[Candle],
        current_price: Optional[float] = None,
    ) -> TimeframeAnalysis:
        """
        Calculate every indicator for one timeframe.

        Args:
            timeframe: Timeframe label ('1h', '4h', 'daily')
            candles: Candles ascending by time
            current_price: Live price for level distances (default: last close)

        Returns:
            Indicator series, crosses and closest levels
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
