from vctools.models.fund_fees import (
    FeeType, FeeBasis, CarryBasis, FundFeeParams, YearRecord, FundFeeResult,
    BarKind, WaterfallBar, TvpiSensitivityPoint,
)
from vctools.models.jcurve import (
    Stage, ExitBucket, StageProfile, StageAllocation, FundSimParams,
    MonthlyCashFlow, YearlyCashFlow, PointInTimeMetrics, FundSimResult,
)
from vctools.models.term_sheet import (
    DealParams, DealStructure, LiquidationTerms, Preference, WaterfallRow, WaterfallResult,
    AntiDilutionMethod, DownRound, CapTableSnapshot, AntiDilutionScenario, TermSheetComparison,
    LiquidationParams, AntiDilutionParams, TermSheetComparisonParams,
)
from vctools.models.valuation import (
    VCMethodParams, VCMethodValuation, VCMethodResult,
    OptionPoolParams, CapTableScenario, OptionPoolResult,
    MultiRoundParams, MultiRoundResult,
    ConvertibleNoteParams, NoteConversion, ConvertibleNoteResult,
    OptionPricingParams, BinomialNode, OptionPricingResult,
    PreferredParams, PreferredRow, PreferredResult,
)

__all__ = [
    "FeeType", "FeeBasis", "CarryBasis", "FundFeeParams", "YearRecord", "FundFeeResult",
    "BarKind", "WaterfallBar", "TvpiSensitivityPoint",
    "Stage", "ExitBucket", "StageProfile", "StageAllocation", "FundSimParams",
    "MonthlyCashFlow", "YearlyCashFlow", "PointInTimeMetrics", "FundSimResult",
    "DealParams", "DealStructure", "LiquidationTerms", "Preference", "WaterfallRow", "WaterfallResult",
    "AntiDilutionMethod", "DownRound", "CapTableSnapshot", "AntiDilutionScenario", "TermSheetComparison",
    "LiquidationParams", "AntiDilutionParams", "TermSheetComparisonParams",
    "VCMethodParams", "VCMethodValuation", "VCMethodResult",
    "OptionPoolParams", "CapTableScenario", "OptionPoolResult",
    "MultiRoundParams", "MultiRoundResult",
    "ConvertibleNoteParams", "NoteConversion", "ConvertibleNoteResult",
    "OptionPricingParams", "BinomialNode", "OptionPricingResult",
    "PreferredParams", "PreferredRow", "PreferredResult",
]
